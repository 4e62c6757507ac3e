from src.checkin.service import CheckInService


def get_check_in_service() -> CheckInService:
    """Dependency to get CheckInService instance (real clock)"""
    return CheckInService()
