"""
Exceptions for Gift codes module
"""
from fastapi import HTTPException

from src.exceptions import ConflictException, InternalServerException, NotFoundException, ValidationException


class GiftCodeException(Exception):
    """Base exception for gift codes"""
    pass


class GiftCodeNotFoundException(GiftCodeException):
    pass


class GiftCodeUnavailableException(GiftCodeException):
    """Inactive, expired or out of uses"""
    pass


class GiftCodeAlreadyRedeemedException(GiftCodeException):
    pass


class GiftCodeAlreadyExistsException(GiftCodeException):
    pass


class GiftCodeRedeemFailedException(GiftCodeException):
    pass


# HTTP Exceptions
def gift_code_not_found_exception(message: str) -> HTTPException:
    return NotFoundException(message)


def gift_code_unavailable_exception(message: str) -> HTTPException:
    return ValidationException(message)


def gift_code_conflict_exception(message: str) -> HTTPException:
    return ConflictException(message)


def gift_code_redeem_failed_exception(message: str) -> HTTPException:
    return InternalServerException(message)
