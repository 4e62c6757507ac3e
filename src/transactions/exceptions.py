"""
Exceptions for Transactions module
"""
from fastapi import HTTPException


class TransactionException(Exception):
    """Base exception for ledger operations"""
    pass


class EmptyTransactionException(TransactionException):
    """Raised when an entry would change neither diamonds nor XP"""
    pass


class InsufficientBalanceException(TransactionException):
    """Raised when a debit would take the balance below zero"""
    pass


# HTTP Exceptions
def transaction_validation_exception(message: str) -> HTTPException:
    return HTTPException(
        status_code=400,
        detail=message
    )


def insufficient_balance_exception(message: str) -> HTTPException:
    return HTTPException(
        status_code=402,
        detail=message
    )
