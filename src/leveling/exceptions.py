"""
Exceptions for Leveling module
"""
from fastapi import HTTPException

from src.exceptions import InternalServerException, TooManyRequestsException, ValidationException


class LevelingException(Exception):
    """Base exception for XP/level operations"""
    pass


class InvalidXpAmountException(LevelingException):
    pass


class XpCooldownException(LevelingException):
    """XP was already granted within the cooldown window"""
    pass


class XpIncrementFailedException(LevelingException):
    pass


# HTTP Exceptions
def invalid_xp_amount_exception(message: str) -> HTTPException:
    return ValidationException(message)


def xp_cooldown_exception(message: str) -> HTTPException:
    return TooManyRequestsException(message)


def xp_increment_failed_exception(message: str) -> HTTPException:
    return InternalServerException(message)
