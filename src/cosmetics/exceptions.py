"""
Exceptions for Cosmetics module
"""
from fastapi import HTTPException

from src.exceptions import (
    ConflictException,
    ForbiddenException,
    InternalServerException,
    NotFoundException,
    PaymentRequiredException,
    ValidationException,
)


class CosmeticException(Exception):
    """Base exception for cosmetics"""
    pass


class CosmeticNotFoundException(CosmeticException):
    pass


class CosmeticNotForSaleException(CosmeticException):
    pass


class CosmeticLockedException(CosmeticException):
    """Unlock requirement (e.g. level) not met"""
    pass


class CosmeticAlreadyOwnedException(CosmeticException):
    pass


class CosmeticNotOwnedException(CosmeticException):
    pass


class NotEnoughDiamondsException(CosmeticException):
    pass


class PurchaseFailedException(CosmeticException):
    pass


# HTTP Exceptions
def cosmetic_not_found_exception(message: str) -> HTTPException:
    return NotFoundException(message)


def cosmetic_bad_request_exception(message: str) -> HTTPException:
    return ValidationException(message)


def cosmetic_locked_exception(message: str) -> HTTPException:
    return ForbiddenException(message)


def not_enough_diamonds_exception(message: str) -> HTTPException:
    return PaymentRequiredException(message)


def purchase_failed_exception(message: str) -> HTTPException:
    return InternalServerException(message)
