"""
Shared pytest fixtures for the inventory aggregator tests.

Provides:
  - SteamStub: a fake Steam Community endpoint built on httpx.MockTransport
  - FastAPI TestClient with the Steam client dependency overridden
  - Session cookie and raw record helpers
"""

import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

STEAM_ID = "76561198000000001"


# ---------------------------------------------------------------------------
# Fake Steam endpoint
# ---------------------------------------------------------------------------

class SteamStub:
    """Records every outbound request and answers with a configurable response."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.status_code = 200
        self.payload: Any = {"assets": [], "descriptions": [], "total_inventory_count": 0, "success": 1}
        self.text: Optional[str] = None
        self.exc: Optional[Exception] = None

    def respond(self, payload: Any = None, status_code: int = 200, text: Optional[str] = None) -> None:
        self.payload = payload
        self.status_code = status_code
        self.text = text

    def raise_error(self, exc: Exception) -> None:
        self.exc = exc

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        if self.payload is None:
            # json=None would send an empty body; send a literal JSON null instead
            return httpx.Response(
                self.status_code, content=b"null", headers={"Content-Type": "application/json"}
            )
        return httpx.Response(self.status_code, json=self.payload)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=httpx.MockTransport(self.handler),
            base_url="https://steamcommunity.test",
        )

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture()
def steam() -> SteamStub:
    return SteamStub()


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

@pytest.fixture()
def dev_mode(monkeypatch):
    from app.core.config import settings
    monkeypatch.setattr(settings, "app_env", "development")
    return settings


@pytest.fixture()
def prod_mode(monkeypatch):
    from app.core.config import settings
    monkeypatch.setattr(settings, "app_env", "production")
    return settings


# ---------------------------------------------------------------------------
# FastAPI TestClient
# ---------------------------------------------------------------------------

@pytest.fixture()
def client(steam: SteamStub):
    """TestClient whose Steam calls go to the `steam` stub."""
    from fastapi.testclient import TestClient
    from app.services.steam import get_steam_client
    from main import app

    async def _override():
        async with steam.client() as c:
            yield c

    app.dependency_overrides[get_steam_client] = _override
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def logged_in(client):
    """`client` with a valid steam_session cookie for STEAM_ID."""
    client.cookies.set("steam_session", session_cookie(steamid=STEAM_ID))
    return client


def session_cookie(**fields: Any) -> str:
    return json.dumps(fields, separators=(",", ":"))


# ---------------------------------------------------------------------------
# Raw record helpers
# ---------------------------------------------------------------------------

class SteamData:
    """Stateless builders for raw Steam inventory records."""

    steam_id = STEAM_ID

    @staticmethod
    def session_cookie(**fields: Any) -> str:
        return session_cookie(**fields)

    @staticmethod
    def asset(
        assetid: str,
        classid: str = "1",
        instanceid: str = "0",
        *,
        appid: int = 753,
        contextid: str = "6",
        amount: str = "1",
    ) -> Dict[str, Any]:
        return {
            "appid": appid,
            "contextid": contextid,
            "assetid": assetid,
            "classid": classid,
            "instanceid": instanceid,
            "amount": amount,
        }

    @staticmethod
    def description(
        classid: str = "1",
        instanceid: str = "0",
        *,
        name: str = "Item",
        appid: int = 753,
        name_color: Optional[str] = None,
        **overrides: Any,
    ) -> Dict[str, Any]:
        desc: Dict[str, Any] = {
            "appid": appid,
            "classid": classid,
            "instanceid": instanceid,
            "name": name,
            "market_hash_name": f"{appid}-{name}",
            "market_name": name,
            "type": "Trading Card",
            "tradable": 1,
            "marketable": 1,
            "commodity": 0,
            "market_tradable_restriction": 7,
            "descriptions": [{"type": "html", "value": "A card"}],
            "icon_url": "icon/" + classid,
            "tags": [{"category": "item_class", "internal_name": "item_class_2"}],
        }
        if name_color is not None:
            desc["name_color"] = name_color
        desc.update(overrides)
        return desc

    @staticmethod
    def page(
        assets: List[Dict[str, Any]],
        descriptions: List[Dict[str, Any]],
        total: Optional[int] = None,
        **extra: Any,
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "assets": assets,
            "descriptions": descriptions,
            "total_inventory_count": len(assets) if total is None else total,
            "success": 1,
        }
        body.update(extra)
        return body


@pytest.fixture()
def data() -> SteamData:
    return SteamData()


@pytest.fixture()
def run() -> Callable:
    """Run a coroutine to completion (service functions are async)."""
    import asyncio
    return asyncio.run
