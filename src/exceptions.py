from typing import Any, Optional

from fastapi import HTTPException, status


class AppException(HTTPException):
    """Base exception for application errors"""
    pass


class ValidationException(AppException):
    def __init__(self, detail: str = "Lỗi xác thực dữ liệu"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail
        )


class NotFoundException(AppException):
    def __init__(self, detail: str = "Không tìm thấy tài nguyên"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail
        )


class PaymentRequiredException(AppException):
    def __init__(self, detail: str = "Không đủ kim cương"):
        super().__init__(
            status_code=status.HTTP_402_PAYMENT_REQUIRED,
            detail=detail
        )


class ForbiddenException(AppException):
    def __init__(self, detail: str = "Bị cấm truy cập"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail
        )


class ConflictException(AppException):
    def __init__(self, detail: Optional[Any] = "Xung đột tài nguyên"):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail
        )


class TooManyRequestsException(AppException):
    def __init__(self, detail: str = "Thao tác quá nhanh, vui lòng thử lại sau"):
        super().__init__(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=detail
        )


class InternalServerException(AppException):
    def __init__(self, detail: str = "Lỗi hệ thống, vui lòng thử lại sau"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail
        )

