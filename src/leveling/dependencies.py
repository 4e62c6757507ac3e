from src.leveling.service import LevelingService


def get_leveling_service() -> LevelingService:
    """Dependency to get LevelingService instance"""
    return LevelingService()
