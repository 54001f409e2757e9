from typing import Optional

class ZohoDeskError(Exception):
    """Base exception for Zoho Desk node errors."""
    pass

class TicketValidationError(ZohoDeskError):
    """Raised when ticket input is rejected before any request is sent."""
    pass

class UnsupportedOperationError(ZohoDeskError):
    """Raised when a node is asked for a resource, operation or loader it does not have."""
    pass

class ApiError(ZohoDeskError):
    """Raised when the Zoho Desk API answers with an error or cannot be reached."""
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

class AuthenticationError(ApiError):
    """Raised when the access token is rejected."""
    pass

class RateLimitError(ApiError):
    """Raised when the organization's request quota is exhausted."""
    pass
