"""
appid → (库存 appid, contextid) 解析

Steam 库存按 app + context 分区：
  753/6  Steam 社区物品（卡牌、表情、背景……），未指定 appid 时的默认值
  {appid}/2  游戏内物品（CS2 / Dota 2 / TF2 以及其他任意游戏）

调用方传入的 appid 只是建议值，无法解析时静默回退到社区物品，不报错。
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Optional

COMMUNITY_APP_ID = "753"
COMMUNITY_CONTEXT_ID = "6"
GAME_CONTEXT_ID = "2"

# CS2 / Dota 2 / TF2
KNOWN_APP_IDS = frozenset({"730", "570", "440"})


class TargetKind(str, Enum):
    DEFAULT = "default"
    KNOWN = "known"
    NUMERIC = "numeric"


class InventoryTarget(NamedTuple):
    kind: TargetKind
    app_id: str
    context_id: str


DEFAULT_TARGET = InventoryTarget(TargetKind.DEFAULT, COMMUNITY_APP_ID, COMMUNITY_CONTEXT_ID)


def resolve_target(app_id: Optional[str]) -> InventoryTarget:
    if not app_id or app_id == COMMUNITY_APP_ID:
        return DEFAULT_TARGET
    if app_id in KNOWN_APP_IDS:
        return InventoryTarget(TargetKind.KNOWN, app_id, GAME_CONTEXT_ID)
    if app_id.isascii() and app_id.isdigit():
        return InventoryTarget(TargetKind.NUMERIC, app_id, GAME_CONTEXT_ID)
    return DEFAULT_TARGET
