"""
响应组装：成功 / 失败信封 + 缓存相关响应头

成功：Cache-Control: s-maxage=300, stale-while-revalidate
      X-Cache-Tags: user-{steamid}-inventory[,app-{appid}-inventory]
失败：Cache-Control: no-store（避免把一次性的上游故障缓存下来）
"""

from __future__ import annotations

from typing import List, Optional

from fastapi.responses import JSONResponse

from app.core.config import settings
from app.schemas.steam import InventoryErrorOut, InventoryPage
from app.services.steam import user_cache_tag

CACHE_TAGS_HEADER = "X-Cache-Tags"


def app_cache_tag(app_id: str) -> str:
    return f"app-{app_id}-inventory"


def cache_tags(steam_id: str, app_filter: Optional[str]) -> List[str]:
    tags = [user_cache_tag(steam_id)]
    if app_filter:
        tags.append(app_cache_tag(app_filter))
    return tags


def inventory_response(page: InventoryPage, steam_id: str, app_filter: Optional[str]) -> JSONResponse:
    resp = JSONResponse(page.model_dump(mode="json"))
    resp.headers["Cache-Control"] = (
        f"s-maxage={settings.inventory_cache_ttl}, stale-while-revalidate"
    )
    resp.headers[CACHE_TAGS_HEADER] = ",".join(cache_tags(steam_id, app_filter))
    return resp


def error_response(status_code: int, error: str, details: Optional[str] = None) -> JSONResponse:
    body = InventoryErrorOut(
        error=error,
        details=details if settings.is_dev else None,
    )
    resp = JSONResponse(body.model_dump(mode="json", exclude_none=True), status_code=status_code)
    resp.headers["Cache-Control"] = "no-store"
    return resp
