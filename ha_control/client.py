"""Minimal HTTP client for the Home Assistant REST API"""

import logging
from typing import Any

import httpx

from ha_control.config import API_TIMEOUT, HA_URL, USER_AGENT
from ha_control.entities import EntityState
from ha_control.errors import HubError

logger = logging.getLogger(__name__)


class HomeAssistantClient:
    """Lists entities, reads their state and calls services.

    Requests are issued one at a time; every failure is raised as HubError.
    """

    def __init__(
        self,
        token: str,
        base_url: str = HA_URL,
        timeout: float = API_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.client = httpx.Client(
            base_url=f"{base_url}/api",
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
                "User-Agent": USER_AGENT,
            },
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> "HomeAssistantClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        self.client.close()

    def _request(self, method: str, path: str, json: dict[str, Any] | None = None) -> Any:
        logger.debug("%s %s", method, path)
        try:
            response = self.client.request(method, path, json=json)
            response.raise_for_status()
        except httpx.HTTPStatusError as error:
            status = error.response.status_code
            if status in (401, 403):
                raise HubError(f"Authentication failed ({status}) - check your API key") from error
            raise HubError(f"API error: {status} - {error.response.text}") from error
        except httpx.RequestError as error:
            raise HubError(f"Network error: {error}") from error

        logger.debug("%s %s -> %s", method, path, response.status_code)
        try:
            return response.json()
        except ValueError as error:
            raise HubError(f"Malformed response from {path}: not JSON") from error

    def list_entities(self) -> list[str]:
        """Get the ids of all entities known to the hub"""
        payload = self._request("GET", "/states")
        if not isinstance(payload, list):
            raise HubError("Malformed response from /states: expected a list")

        entity_ids: list[str] = []
        for item in payload:
            if not isinstance(item, dict) or not isinstance(item.get("entity_id"), str):
                raise HubError("Malformed response from /states: entry without entity_id")
            entity_ids.append(item["entity_id"])
        return entity_ids

    def get_state(self, entity_id: str) -> EntityState:
        """Get current state and attributes of one entity"""
        try:
            payload = self._request("GET", f"/states/{entity_id}")
        except HubError as error:
            cause = error.__cause__
            if isinstance(cause, httpx.HTTPStatusError) and cause.response.status_code == 404:
                raise HubError(f"Entity not found: {entity_id}") from cause
            raise

        if not isinstance(payload, dict):
            raise HubError(f"Malformed response for {entity_id}: expected an object")
        return EntityState.from_api(payload, entity_id)

    def call_service(self, domain: str, service: str, data: dict[str, Any]) -> list[dict[str, Any]]:
        """Call a service, e.g. light.toggle with {"entity_id": ...}"""
        result = self._request("POST", f"/services/{domain}/{service}", json=data)
        return result if isinstance(result, list) else []
