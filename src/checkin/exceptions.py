"""
Exceptions for Check-in module
"""
from fastapi import HTTPException, status

from src.checkin.constants import ALREADY_CHECKED_IN


class CheckInException(Exception):
    """Base exception for check-in operations"""
    pass


class AlreadyCheckedInException(CheckInException):
    """Raised when the user has already checked in on the current local day"""
    pass


class CheckInFailedException(CheckInException):
    """Raised when the balance update or log insert failed; nothing was persisted"""
    pass


# HTTP Exceptions
def already_checked_in_exception(message: str = ALREADY_CHECKED_IN) -> HTTPException:
    # checkedIn lets the client tell "no-op, already done" apart from a failure
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail={"message": message, "checkedIn": True}
    )


def check_in_failed_exception(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=message
    )
