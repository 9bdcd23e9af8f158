"""Authentication policy errors."""

from typing import Any, Optional


class UnauthorizedServiceException(Exception):
    """
    Raised when a service is not registered or may not use single sign-on.

    Terminal for the authentication transaction: callers must abort,
    not retry or fall back to default handling.
    """

    CODE = "screen.service.sso.error.message"

    def __init__(self, service: Optional[Any] = None, message: Optional[str] = None):
        self.service = service
        self.code = self.CODE
        if message is None:
            service_id = getattr(service, "id", service)
            message = f"Service [{service_id}] is not allowed to use SSO"
        super().__init__(message)
