"""
Bearer token authentication for the booking API.
"""

from typing import Optional

from fastapi import Header, Request

from booking_service.clients.auth_client import AuthClient
from booking_service.errors import UnauthorizedError


def require_token(request: Request, authorization: Optional[str] = Header(None)) -> str:
    """
    FastAPI dependency that verifies the ``Authorization: Bearer`` header.

    Returns:
        The verified token

    Raises:
        UnauthorizedError: Missing header, invalid token or unreachable verifier
    """
    if not authorization:
        raise UnauthorizedError("No authorization header provided")

    parts = authorization.split()
    token = parts[1] if len(parts) > 1 else ""
    if not token:
        raise UnauthorizedError("Invalid token")

    auth_client: AuthClient = request.app.state.auth_client
    if not auth_client.verify_token(token):
        raise UnauthorizedError("Invalid token")

    request.state.access_token = token
    return token
