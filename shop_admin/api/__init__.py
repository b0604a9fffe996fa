from .client import ApiClient, ApiError, ApiResponse, AuthExpiredError
from .session import SessionContext

__all__ = [
    "ApiClient",
    "ApiError",
    "ApiResponse",
    "AuthExpiredError",
    "SessionContext",
]
