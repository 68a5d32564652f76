"""
Steam 库存聚合接口

GET /api/steam/inventory
    ?steamid=   目标用户（默认取会话中的 steamid）
    &page=1     页码，从 1 开始
    &limit=100  每页数量，上限 100
    &appid=     可选，游戏 appid（默认 Steam 社区物品 753）
    &start_assetid=  翻页游标（上一页的 next_cursor），仅 page > 1 时生效

会话来自 steam_session Cookie；缺失/无效 → 401，取不到 steamid → 400，
Steam 失败 → 500（details 仅开发模式返回）。
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Query

from app.api.responses import error_response, inventory_response
from app.core.errors import FETCH_FAILED, BadRequestError, InventoryError
from app.core.session import SteamSession, get_session, is_steam_id
from app.services import inventory as inventory_svc
from app.services.steam import get_steam_client

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("")
async def get_inventory(
    steamid: Optional[str] = Query(None, description="目标 Steam ID，默认当前登录用户"),
    page: int = Query(1, description="页码"),
    limit: int = Query(100, description="每页数量，超过 100 按 100 处理"),
    appid: Optional[str] = Query(None, description="游戏 appid，如 730 / 570 / 440"),
    start_assetid: Optional[str] = Query(None, description="翻页游标，仅 page > 1 时使用"),
    session: SteamSession = Depends(get_session),
    client: httpx.AsyncClient = Depends(get_steam_client),
):
    steam_id = steamid or session.steamid
    if not steam_id:
        raise BadRequestError()
    if not is_steam_id(steam_id):
        raise BadRequestError("Invalid Steam ID")

    try:
        result = await inventory_svc.get_inventory_page(
            client,
            steam_id,
            page=page,
            limit=limit,
            app_id=appid or None,
            start_assetid=start_assetid,
        )
    except InventoryError:
        raise
    except Exception as e:
        logger.exception("Inventory API error: steamid=%s", steam_id)
        return error_response(500, FETCH_FAILED, str(e))

    return inventory_response(result, steam_id, appid or None)
