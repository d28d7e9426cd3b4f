from fastapi import status
from typing import Any, Optional

class AppException(Exception):
    """
    Base exception for every error the application raises on purpose.

    Carries a machine-readable error_code and the HTTP status the boundary
    layer should answer with.
    """
    def __init__(
        self, 
        message: str, 
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: str = "INTERNAL_SERVER_ERROR",
        details: Optional[Any] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)

    def __repr__(self):
        return f"<{type(self).__name__}(error_code='{self.error_code}', status_code={self.status_code})>"
