from src.models import CustomModel
from src.users.schemas import UserCreate, UserResponse

class LoginRequest(CustomModel):
    username: str
    password: str

class Token(CustomModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int

class ErrorResponse(CustomModel):
    message: str
    code: str
    action: str

class AuthErrorResponse(CustomModel):
    detail: ErrorResponse
