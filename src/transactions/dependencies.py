from src.transactions.service import TransactionService


def get_transaction_service() -> TransactionService:
    """Dependency to get TransactionService instance"""
    return TransactionService()
