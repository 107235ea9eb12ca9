"""HTTP client for the service request API."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

import httpx

from fieldservice.client.config import client_settings

logger = logging.getLogger(__name__)

SERVICE_REQUESTS_PATH = "/api/service-requests"


@dataclass(frozen=True)
class ClientContext:
    """Explicit per-session values every API call needs."""

    token: str
    base_url: str = field(default_factory=lambda: client_settings.BASE_URL)


class ServiceRequestClient:
    """
    Thin async wrapper over the service request endpoints.

    Example usage:
        async with ServiceRequestClient(ClientContext(token=access_token)) as api:
            records = await api.list_service_requests()
            response = await api.update_service_request(records[0]["_id"], payload)
    """

    def __init__(
        self,
        context: ClientContext,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        self.context = context
        self.client = httpx.AsyncClient(
            base_url=context.base_url,
            timeout=timeout if timeout is not None else client_settings.TIMEOUT_SECONDS,
            transport=transport,
        )

    async def close(self):
        """Close HTTP client."""
        await self.client.aclose()

    async def __aenter__(self) -> "ServiceRequestClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def _build_headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "Authorization": f"Bearer {self.context.token}",
        }

    async def list_service_requests(self) -> List[Dict[str, Any]]:
        response = await self.client.get(SERVICE_REQUESTS_PATH, headers=self._build_headers())
        response.raise_for_status()
        return response.json()

    async def create_service_request(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        response = await self.client.post(
            SERVICE_REQUESTS_PATH,
            json=dict(data),
            headers=self._build_headers(),
        )
        response.raise_for_status()
        return response.json()

    async def update_service_request(
        self, request_id: str, payload: Mapping[str, Any]
    ) -> httpx.Response:
        """
        PUT the update payload. The raw response is returned so the caller
        can branch on the status code.
        """
        url = f"{SERVICE_REQUESTS_PATH}/{request_id}"
        logger.info("service_request_update_request", extra={"url": url})
        return await self.client.put(url, json=dict(payload), headers=self._build_headers())
