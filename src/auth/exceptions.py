from fastapi import HTTPException, status

from src.auth.constants import ADMIN_ONLY


class AuthException(HTTPException):
    """Base exception for authentication errors"""
    pass

class UserAlreadyExistsException(AuthException):
    def __init__(self, detail: str = "Người dùng đã tồn tại"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail
        )

class InvalidCredentialsException(AuthException):
    def __init__(self, detail: str = "Thông tin đăng nhập không hợp lệ"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail
        )

class InsufficientPermissionsException(AuthException):
    def __init__(self, custom_message: str = None):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=custom_message or ADMIN_ONLY
        )

class TokenMissingException(AuthException):
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "message": "Không tìm thấy token xác thực",
                "code": "token_missing",
                "action": "login_required"
            },
            headers={"WWW-Authenticate": "Bearer"},
        )

class TokenNotValidException(AuthException):
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "message": "Token không hợp lệ hoặc đã hết hạn",
                "code": "token_not_valid",
                "action": "login_required"
            },
            headers={"WWW-Authenticate": "Bearer"},
        )

class InactiveAccountException(AuthException):
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": "Tài khoản không hoạt động",
                "code": "account_inactive",
                "action": "contact_admin"
            }
        )
