from src.giftcodes.service import GiftCodeService


def get_gift_code_service() -> GiftCodeService:
    """Dependency to get GiftCodeService instance"""
    return GiftCodeService()
