from src.milestones.service import MilestoneService


def get_milestone_service() -> MilestoneService:
    """Dependency to get MilestoneService instance"""
    return MilestoneService()
