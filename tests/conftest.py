import json
from pathlib import Path
from typing import Any

import httpx
import pytest

from ha_control import lights, thermostat
from ha_control.client import HomeAssistantClient

TEST_TOKEN = "test-token"
TEST_BASE_URL = "http://hub.test"


class FakeHub:
    """In-memory stand-in for the Home Assistant REST API.

    Serves /api/states and /api/states/<id> from ``states`` and records
    service calls. light.toggle flips the stored state like the real hub.
    """

    def __init__(self, states: list[dict[str, Any]] | None = None, status: int = 200) -> None:
        self.states = {state["entity_id"]: state for state in states or []}
        self.status = status
        self.requests: list[httpx.Request] = []
        self.service_calls: list[tuple[str, str, dict[str, Any]]] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status != 200:
            return httpx.Response(self.status, text="denied")

        path = request.url.path
        if request.method == "GET" and path == "/api/states":
            return httpx.Response(200, json=list(self.states.values()))

        if request.method == "GET" and path.startswith("/api/states/"):
            entity_id = path.removeprefix("/api/states/")
            if entity_id not in self.states:
                return httpx.Response(404, json={"message": "Entity not found."})
            return httpx.Response(200, json=self.states[entity_id])

        if request.method == "POST" and path.startswith("/api/services/"):
            domain, service = path.removeprefix("/api/services/").split("/")
            data = json.loads(request.content)
            self.service_calls.append((domain, service, data))
            entity = self.states[data["entity_id"]]
            if service == "toggle":
                entity["state"] = "off" if entity["state"] == "on" else "on"
            return httpx.Response(200, json=[entity])

        return httpx.Response(404)

    def client(self, token: str = TEST_TOKEN) -> HomeAssistantClient:
        return HomeAssistantClient(token, base_url=TEST_BASE_URL, transport=httpx.MockTransport(self.handler))


def light(entity_id: str, state: str, friendly_name: str | None = None) -> dict[str, Any]:
    attributes: dict[str, Any] = {"supported_color_modes": ["onoff"]}
    if friendly_name is not None:
        attributes["friendly_name"] = friendly_name
    return {"entity_id": entity_id, "state": state, "attributes": attributes}


@pytest.fixture
def home_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty home directory used by Path.home()"""
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


@pytest.fixture
def env_file(home_dir: Path) -> Path:
    path = home_dir / ".env"
    path.write_text(f"OTHER=1\nAPI_KEY_HA={TEST_TOKEN}\n", encoding="utf-8")
    return path


@pytest.fixture
def kitchen_and_hall() -> FakeHub:
    return FakeHub(
        [
            light("light.kitchen", "on", "Kitchen"),
            light("light.hall", "off"),
            {"entity_id": "sensor.outside", "state": "12", "attributes": {}},
        ]
    )


@pytest.fixture
def use_hub(monkeypatch: pytest.MonkeyPatch):
    """Point both commands at a FakeHub and drop the settle delay"""

    def install(hub: FakeHub) -> FakeHub:
        def factory(token: str) -> HomeAssistantClient:
            assert token == TEST_TOKEN, f"Unexpected token {token!r}"
            return hub.client(token)

        monkeypatch.setattr(lights, "HomeAssistantClient", factory)
        monkeypatch.setattr(thermostat, "HomeAssistantClient", factory)
        monkeypatch.setattr(lights, "SETTLE_DELAY", 0)
        return hub

    return install
