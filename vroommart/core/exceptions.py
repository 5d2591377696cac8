# vroommart/core/exceptions.py

from enum import Enum
from typing import Optional, Dict, Any
import logging
from fastapi import status

logger = logging.getLogger(__name__)

class ErrorCode(Enum):
    """Standardized error codes for the application."""

    # Request errors
    INVALID_OPERATION = "INVALID_OPERATION"
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    CONFLICT = "CONFLICT"

    # Authentication errors
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"

    # System errors
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

STATUS_CODES: Dict[ErrorCode, int] = {
    ErrorCode.INVALID_OPERATION: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.AUTHENTICATION_FAILED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INTERNAL_SERVER_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.RATE_LIMIT_EXCEEDED: status.HTTP_429_TOO_MANY_REQUESTS,
}

class VroomMartError(Exception):
    """Base exception for all VroomMart application errors."""

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        technical_details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        self.code = code
        self.user_message = user_message
        self.technical_details = technical_details
        self.context = context or {}

        logger.warning(
            f"VroomMart Error: {code.value}",
            extra={
                "error_code": code.value,
                "user_message": user_message,
                "technical_details": technical_details,
                "context": self.context
            }
        )

        super().__init__(self.user_message)

    @property
    def status_code(self) -> int:
        return STATUS_CODES.get(self.code, status.HTTP_400_BAD_REQUEST)

    def to_response(self) -> Dict[str, Any]:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code.value,
                "message": self.user_message,
                "context": self.context
            }
        }

class NotFoundError(VroomMartError):
    """Raised when a requested entity does not exist."""

    def __init__(self, resource: str, identifier: Any = None):
        context = {"resource": resource}
        if identifier is not None:
            context["id"] = str(identifier)
        super().__init__(
            code=ErrorCode.NOT_FOUND,
            user_message=f"{resource} not found",
            context=context
        )

class OwnershipError(VroomMartError):
    """Raised when the acting user does not own (or take part in) a resource."""

    def __init__(self, resource: str, action: str = "modify"):
        super().__init__(
            code=ErrorCode.FORBIDDEN,
            user_message=f"Not authorized to {action} this {resource.lower()}",
            context={"resource": resource, "action": action}
        )

class InvalidOperationError(VroomMartError):
    def __init__(self, user_message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            code=ErrorCode.INVALID_OPERATION,
            user_message=user_message,
            context=context
        )

class ConflictError(VroomMartError):
    def __init__(self, user_message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            code=ErrorCode.CONFLICT,
            user_message=user_message,
            context=context
        )

class AuthenticationError(VroomMartError):
    """Exception raised for authentication-related errors."""

    def __init__(self, message: str = "Could not validate credentials"):
        self.message = message
        super().__init__(
            code=ErrorCode.AUTHENTICATION_FAILED,
            user_message=message
        )
