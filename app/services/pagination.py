"""
过滤 / 排序 / 分页元数据

排序规则（稀有度优先）：
  有 name_color 的排在没有的前面；
  两者都有 name_color 时按颜色字符串降序，颜色相同视为相等（不再比名称）；
  两者都没有时按 name 升序。
Python 的 sort 是稳定的，相等元素保持 asset 原始顺序，保证同一请求重复分页结果一致。

total_pages / has_more / next_cursor 只信上游：本服务一次只看到一页，
无法推算全局总数。
"""

from __future__ import annotations

import math
from functools import cmp_to_key
from typing import List, Optional, Sequence

from app.schemas.steam import InventoryItem, InventoryPage
from app.services.identifiers import InventoryTarget


def _cmp(a: str, b: str) -> int:
    return (a > b) - (a < b)


def compare_items(a: InventoryItem, b: InventoryItem) -> int:
    if a.name_color and b.name_color:
        return _cmp(b.name_color, a.name_color)
    if a.name_color:
        return -1
    if b.name_color:
        return 1
    return _cmp(a.name, b.name)


def sort_items(items: Sequence[InventoryItem]) -> List[InventoryItem]:
    return sorted(items, key=cmp_to_key(compare_items))


def filter_by_app(items: Sequence[InventoryItem], app_filter: Optional[str]) -> List[InventoryItem]:
    if not app_filter:
        return list(items)
    return [i for i in items if str(i.appid) == app_filter]


def total_pages(total: int, limit: int) -> int:
    if limit <= 0:
        return 0
    return math.ceil(total / limit)


def build_page(
    items: Sequence[InventoryItem],
    *,
    target: InventoryTarget,
    app_filter: Optional[str],
    total: int,
    limit: int,
    page: int,
    has_more: bool,
    next_cursor: Optional[str],
) -> InventoryPage:
    selected = sort_items(filter_by_app(items, app_filter))
    return InventoryPage(
        items=selected,
        total_count=total,
        page=page,
        limit=limit,
        total_pages=total_pages(total, limit),
        has_more=has_more,
        next_cursor=next_cursor,
        catalog_id=target.app_id,
        partition_id=target.context_id,
    )
