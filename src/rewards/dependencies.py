from src.rewards.service import RewardCatalogService


def get_reward_catalog_service() -> RewardCatalogService:
    """Dependency to get RewardCatalogService instance"""
    return RewardCatalogService()
