from src.cosmetics.service import CosmeticService


def get_cosmetic_service() -> CosmeticService:
    """Dependency to get CosmeticService instance"""
    return CosmeticService()
