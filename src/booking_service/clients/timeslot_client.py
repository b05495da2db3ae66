"""
Timeslot API Client

Thin HTTP client for flipping a provider timeslot between "booked" and
"available" in the timeslot service.
"""

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from booking_service.clients.base_client import BaseClient
from booking_service.errors import RemoteCallError, UpstreamError

logger = logging.getLogger(__name__)

TIMESLOT_BOOKED = "booked"
TIMESLOT_AVAILABLE = "available"


class TimeslotClient(BaseClient):
    """HTTP client for the timeslot service."""

    def __init__(self, base_url: Optional[str] = None, timeout: float = 5.0,
                 transport: Optional[httpx.BaseTransport] = None):
        """
        Initialize timeslot client.

        Args:
            base_url: Service base URL. Defaults to TIMESLOT_SERVICE_URL env var.
            timeout: Request timeout in seconds
        """
        super().__init__(
            base_url=base_url,
            env_var="TIMESLOT_SERVICE_URL",
            default_url="http://localhost:3006/api",
            timeout=timeout,
            transport=transport,
        )

    def set_timeslot_status(
        self,
        provider_user_sub: str,
        timeslot_id: str,
        status: str,
        service_id: Optional[str],
    ) -> Any:
        """
        Set a timeslot's status and its associated serviceId.

        Args:
            provider_user_sub: Provider owning the timeslot
            timeslot_id: Timeslot identifier
            status: "booked" or "available"
            service_id: Id to associate with the timeslot, or None to clear it

        Returns:
            The ``data`` field of the timeslot service response

        Raises:
            RemoteCallError: If the service reports failure or cannot be reached
        """
        path = f"/timeslots/{quote(provider_user_sub, safe='')}/{quote(timeslot_id, safe='')}"
        payload = {"status": status, "serviceId": service_id}

        try:
            body = self._request("PUT", path, json=payload)
        except UpstreamError as e:
            logger.error("Error calling timeslot service", extra={
                "timeslot_id": timeslot_id,
                "error": str(e),
            })
            raise RemoteCallError("Error calling timeslot service") from e

        if not isinstance(body, dict):
            logger.error("Malformed timeslot service response", extra={"timeslot_id": timeslot_id})
            raise RemoteCallError("Error calling timeslot service")

        if not body.get("success"):
            message = body.get("message") or "Failed to update timeslot"
            logger.error("Timeslot service rejected update", extra={
                "timeslot_id": timeslot_id,
                "status": status,
                "error": message,
            })
            raise RemoteCallError(message)

        return body.get("data")
