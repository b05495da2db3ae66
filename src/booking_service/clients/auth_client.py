"""
Auth API Client

Thin HTTP client for the token verification endpoint of the auth service.
"""

from typing import Optional

import httpx

from booking_service.clients.base_client import BaseClient
from booking_service.errors import UnauthorizedError


class AuthClient(BaseClient):
    """HTTP client for the auth service."""

    def __init__(self, base_url: Optional[str] = None, timeout: float = 5.0,
                 transport: Optional[httpx.BaseTransport] = None):
        super().__init__(
            base_url=base_url,
            env_var="AUTH_SERVICE_URL",
            default_url="http://localhost:3000/api/auth",
            timeout=timeout,
            transport=transport,
        )

    def verify_token(self, token: str) -> bool:
        """
        Ask the auth service whether a bearer token is valid.

        Returns:
            True when the auth service answers ``{"success": true}``

        Raises:
            UnauthorizedError: When the auth service rejects the call, cannot be
                reached, or answers with something unreadable
        """
        url = f"{self.base_url}/verify-token"

        try:
            response = self._client.get(url, headers={"Authorization": f"Bearer {token}"})
        except httpx.RequestError as e:
            raise UnauthorizedError("No response received from authentication server") from e

        if response.is_error:
            message = None
            try:
                body = response.json()
                if isinstance(body, dict):
                    message = body.get("message")
            except ValueError:
                pass
            raise UnauthorizedError(message or "Token verification failed")

        try:
            body = response.json()
        except ValueError as e:
            raise UnauthorizedError("Error occurred during authentication") from e

        return isinstance(body, dict) and body.get("success") is True
