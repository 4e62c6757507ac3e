"""
Exceptions for Milestones module
"""
from fastapi import HTTPException

from src.exceptions import (
    ConflictException,
    ForbiddenException,
    InternalServerException,
    NotFoundException,
    ValidationException,
)


class MilestoneException(Exception):
    """Base exception for milestone claims"""
    pass


class InvalidMilestoneException(MilestoneException):
    """milestone_days is not one of the allowed thresholds"""
    pass


class StreakNotReachedException(MilestoneException):
    pass


class MilestoneRewardNotConfiguredException(MilestoneException):
    pass


class MilestoneAlreadyClaimedException(MilestoneException):
    pass


class MilestoneClaimFailedException(MilestoneException):
    pass


# HTTP Exceptions
def invalid_milestone_exception(message: str) -> HTTPException:
    return ValidationException(message)


def streak_not_reached_exception(message: str) -> HTTPException:
    return ForbiddenException(message)


def milestone_reward_not_configured_exception(message: str) -> HTTPException:
    return NotFoundException(message)


def milestone_already_claimed_exception(message: str) -> HTTPException:
    return ConflictException(message)


def milestone_claim_failed_exception(message: str) -> HTTPException:
    return InternalServerException(message)
