"""
库存聚合主流程：resolve → fetch → reconcile → filter/sort/paginate

单个请求内顺序执行，唯一的挂起点是 Steam 请求；不重试，上游失败即整个请求失败。
合并阶段丢弃的物品只记日志，不影响响应。
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from app.core.config import settings
from app.schemas.steam import InventoryPage
from app.services import steam as steam_svc
from app.services.identifiers import resolve_target
from app.services.pagination import build_page
from app.services.reconcile import reconcile_with_stats

logger = logging.getLogger(__name__)


async def get_inventory_page(
    client: httpx.AsyncClient,
    steam_id: str,
    page: int = 1,
    limit: Optional[int] = None,
    app_id: Optional[str] = None,
    start_assetid: Optional[str] = None,
    locale: Optional[str] = None,
) -> InventoryPage:
    """
    返回一页聚合后的库存。

    page > 1 时才使用 start_assetid（上一页返回的 next_cursor），
    第 1 页无论调用方传什么都从头拉。
    """
    page = max(page, 1)
    limit = steam_svc.clamp_page_size(limit)
    target = resolve_target(app_id)
    cursor = start_assetid if page > 1 else None

    raw = await steam_svc.fetch_inventory_page(
        client,
        steam_id,
        target,
        count=limit,
        start_assetid=cursor,
        locale=locale or settings.steam_inventory_locale,
    )

    items, stats = reconcile_with_stats(raw.assets, raw.descriptions)
    if stats.dropped:
        logger.info(
            "reconcile %s %s/%s: assets=%d kept=%d unmatched=%d invalid=%d",
            steam_id, target.app_id, target.context_id,
            stats.assets, len(items), stats.unmatched, stats.invalid,
        )

    return build_page(
        items,
        target=target,
        app_filter=app_id,
        total=raw.total_inventory_count,
        limit=limit,
        page=page,
        has_more=raw.more_items,
        next_cursor=raw.last_assetid,
    )
