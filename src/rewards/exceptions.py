from fastapi import HTTPException


class RewardException(Exception):
    """Base exception for reward catalog operations"""
    pass


class RewardNotFoundException(RewardException):
    pass


class RewardAlreadyExistsException(RewardException):
    """An active row already exists for this streak length"""
    pass


def reward_not_found_exception(message: str) -> HTTPException:
    return HTTPException(
        status_code=404,
        detail=message
    )


def reward_already_exists_exception(message: str) -> HTTPException:
    return HTTPException(
        status_code=409,
        detail=message
    )
