"""
Steam Community 库存单页拉取

端点：GET https://steamcommunity.com/inventory/{steamid}/{appid}/{contextid}
      ?l=english&count={1..100}[&start_assetid={cursor}]

每次请求只拉一页，分页游标（last_assetid）原样交还给调用方，
不在本服务内自动翻页。

结果分类：
  网络错误 / 超时 / 非 2xx / 响应体不是 JSON 对象  → TransportError
  2xx 但响应体含 error 字段（如私密库存）           → UpstreamError
  其他                                                → SteamInventoryPage
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

import httpx
from pydantic import ValidationError

from app.core.config import settings
from app.core.errors import TransportError, UpstreamError
from app.schemas.steam import SteamInventoryPage
from app.services.identifiers import InventoryTarget

logger = logging.getLogger(__name__)

INVENTORY_PATH = "/inventory/{steam_id}/{app_id}/{context_id}"

_BASE_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept-Language": "en-US,en;q=0.9",
}


def clamp_page_size(count: Optional[int]) -> int:
    """调用方传入的 count 不可信：上限 inventory_max_page_size，下限 1"""
    ceiling = settings.inventory_max_page_size
    if count is None:
        return ceiling
    return max(1, min(count, ceiling))


def user_cache_tag(steam_id: str) -> str:
    return f"user-{steam_id}-inventory"


def _build_cookies() -> Optional[Dict[str, str]]:
    if settings.steam_community_token:
        return {"steamLoginSecure": settings.steam_community_token}
    return None


def build_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=settings.steam_community_base_url,
        timeout=settings.steam_request_timeout,
        headers=_BASE_HEADERS,
        cookies=_build_cookies(),
    )


async def get_steam_client():
    """FastAPI 依赖：每个请求一个 AsyncClient，测试中可覆盖为 MockTransport"""
    async with build_client() as client:
        yield client


def build_params(count: int, start_assetid: Optional[str], locale: str) -> dict:
    params: dict = {"l": locale, "count": clamp_page_size(count)}
    if start_assetid:
        params["start_assetid"] = start_assetid
    return params


async def fetch_inventory_page(
    client: httpx.AsyncClient,
    steam_id: str,
    target: InventoryTarget,
    count: int,
    start_assetid: Optional[str] = None,
    locale: Optional[str] = None,
) -> SteamInventoryPage:
    """
    拉取一页库存。start_assetid 由调用方决定是否传入（第 1 页不传）。

    请求上附带 5 分钟缓存提示和 user-{steamid}-inventory 缓存标签，
    供中间的缓存层按用户精确失效；这里不读也不清缓存。
    """
    url = INVENTORY_PATH.format(
        steam_id=steam_id, app_id=target.app_id, context_id=target.context_id
    )
    params = build_params(count, start_assetid, locale or settings.steam_inventory_locale)
    headers = {
        "Cache-Control": f"max-age={settings.inventory_cache_ttl}",
        "X-Cache-Tags": user_cache_tag(steam_id),
    }

    if settings.is_dev:
        logger.info("Fetching inventory from: %s params=%s", url, params)
        logger.info("Using appId: %s, contextId: %s", target.app_id, target.context_id)

    try:
        r = await client.get(url, params=params, headers=headers)
    except httpx.TimeoutException as e:
        raise TransportError(f"Failed to fetch inventory: timeout - {e}")
    except httpx.HTTPError as e:
        raise TransportError(f"Failed to fetch inventory: {type(e).__name__} - {e}")

    if r.status_code == 429:
        logger.warning("Steam 请求频率过高 steamid=%s", steam_id)
    if not r.is_success:
        raise TransportError(
            f"Failed to fetch inventory: {r.status_code} - {r.text}",
            upstream_status=r.status_code,
            body=r.text,
        )

    try:
        data = r.json()
    except ValueError:
        raise TransportError(
            f"Failed to fetch inventory: {r.status_code} - invalid JSON body",
            upstream_status=r.status_code,
            body=r.text,
        )
    if data is None:
        # 空库存时 Steam 偶尔返回 null
        data = {}
    if not isinstance(data, dict):
        raise TransportError(
            f"Failed to fetch inventory: {r.status_code} - unexpected body",
            upstream_status=r.status_code,
            body=r.text,
        )

    if data.get("error"):
        raise UpstreamError(str(data["error"]))

    try:
        page = SteamInventoryPage.model_validate(data)
    except ValidationError as e:
        raise TransportError(
            f"Failed to fetch inventory: {r.status_code} - malformed body: {e.error_count()} errors",
            upstream_status=r.status_code,
            body=r.text,
        )

    logger.debug(
        "fetch_inventory_page: %s %s/%s assets=%d descriptions=%d total=%d more=%s",
        steam_id, target.app_id, target.context_id,
        len(page.assets), len(page.descriptions), page.total_inventory_count, page.more_items,
    )
    return page
