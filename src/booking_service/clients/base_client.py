"""
Base HTTP Client

Shared base class for the thin HTTP clients used to reach upstream services.
"""

import os
from typing import Any, Dict, Optional

import httpx

from booking_service.errors import UpstreamError


class BaseClient:
    """Base HTTP client with common error handling."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        env_var: str = "",
        default_url: Optional[str] = None,
        timeout: float = 5.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize base client.

        Args:
            base_url: API base URL (overrides env var)
            env_var: Environment variable name for base URL
            default_url: Default base URL if not provided and env var is not set
            timeout: Request timeout in seconds; a call exceeding it fails
            transport: Optional httpx transport (used by tests)

        Raises:
            ValueError: If no base URL can be resolved
        """
        if base_url:
            self.base_url = base_url
        else:
            env_value = os.getenv(env_var) if env_var else None
            if env_value:
                self.base_url = env_value
            elif default_url is not None:
                self.base_url = default_url
            else:
                raise ValueError(
                    f"Base URL is required. Either provide 'base_url' parameter "
                    f"or set environment variable '{env_var}'"
                )

        self.base_url = self.base_url.rstrip("/")
        self.timeout = timeout
        # Single httpx client instance, reused for every call
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """
        Make HTTP request and return parsed JSON.

        Args:
            method: HTTP method (GET, PUT, etc.)
            path: API path (will be appended to base_url)
            json: JSON payload for POST/PUT requests
            params: Query parameters
            headers: Extra request headers

        Returns:
            Parsed JSON response

        Raises:
            UpstreamError: On network failures, HTTP errors or a non-JSON body
        """
        url = f"{self.base_url}{path}"

        try:
            response = self._client.request(
                method=method,
                url=url,
                json=json,
                params=params,
                headers=headers,
            )
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            error_text = e.response.text[:500] if e.response.text else ""
            raise UpstreamError(
                f"API returned error {status_code}: {error_text}"
            ) from e
        except httpx.RequestError as e:
            raise UpstreamError(
                f"API request failed: {str(e)}"
            ) from e
        except ValueError as e:
            raise UpstreamError(
                f"API returned malformed JSON: {str(e)}"
            ) from e

    def close(self) -> None:
        """Close the underlying httpx client."""
        self._client.close()
