"""
assets × descriptions 合并

Steam 库存响应中，assets 只有实例信息（assetid / amount / contextid），
名称、图标、标签等都在 descriptions 里，通过 (classid, instanceid) 关联。

先 join，再整体校验：找不到 description 或必填字段缺失/类型不对的 asset
直接丢弃（无法渲染），不影响同页其他物品，也不算请求失败。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple
from urllib.parse import quote

from pydantic import ValidationError

from app.schemas.steam import InventoryItem

logger = logging.getLogger(__name__)

DescKey = Tuple[str, str]

# encodeURIComponent 不转义的字符
_URI_COMPONENT_SAFE = "-_.!~*'()"


@dataclass(frozen=True)
class ReconcileStats:
    assets: int = 0
    matched: int = 0
    unmatched: int = 0
    invalid: int = 0

    @property
    def dropped(self) -> int:
        return self.unmatched + self.invalid


def encode_hash_name(name: Any) -> Any:
    """market_hash_name 百分号编码（与前端 encodeURIComponent 一致），非字符串原样返回交给校验"""
    if not isinstance(name, str):
        return name
    return quote(name, safe=_URI_COMPONENT_SAFE)


def _key(record: Dict[str, Any]) -> Optional[DescKey]:
    classid = record.get("classid")
    instanceid = record.get("instanceid")
    if classid is None or instanceid is None:
        return None
    return str(classid), str(instanceid)


def index_descriptions(descriptions: Iterable[Dict[str, Any]]) -> Dict[DescKey, Dict[str, Any]]:
    """classid_instanceid → description，重复时保留第一条"""
    desc_map: Dict[DescKey, Dict[str, Any]] = {}
    for desc in descriptions:
        if not isinstance(desc, dict):
            continue
        key = _key(desc)
        if key is not None:
            desc_map.setdefault(key, desc)
    return desc_map


def merge_record(asset: Dict[str, Any], desc: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(desc)
    merged["assetid"] = asset.get("assetid")
    merged["amount"] = asset.get("amount")
    merged["contextid"] = asset.get("contextid")
    if merged.get("appid") is None:
        merged["appid"] = asset.get("appid")
    merged["market_hash_name"] = encode_hash_name(desc.get("market_hash_name"))
    return merged


def reconcile_with_stats(
    assets: Iterable[Dict[str, Any]],
    descriptions: Iterable[Dict[str, Any]],
) -> Tuple[List[InventoryItem], ReconcileStats]:
    desc_map = index_descriptions(descriptions)
    items: List[InventoryItem] = []
    total = matched = invalid = 0

    for asset in assets:
        total += 1
        key = _key(asset) if isinstance(asset, dict) else None
        desc = desc_map.get(key) if key is not None else None
        if desc is None:
            continue
        matched += 1
        try:
            items.append(InventoryItem.model_validate(merge_record(asset, desc)))
        except ValidationError as e:
            invalid += 1
            logger.debug("drop asset %s: %d invalid fields", asset.get("assetid"), e.error_count())

    stats = ReconcileStats(assets=total, matched=matched, unmatched=total - matched, invalid=invalid)
    return items, stats


def reconcile(
    assets: Iterable[Dict[str, Any]],
    descriptions: Iterable[Dict[str, Any]],
) -> List[InventoryItem]:
    items, _ = reconcile_with_stats(assets, descriptions)
    return items
