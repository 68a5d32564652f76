"""Steam Community 库存接口响应 / 本服务输出的 Pydantic 模型"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StringConstraints, field_validator


# ---------- 上游原始响应（字段均不可信，缺失即取默认值） ----------

class SteamInventoryPage(BaseModel):
    """
    GET /inventory/{steamid}/{appid}/{contextid} 的单页响应。

    assets / descriptions 保持原始 dict，逐条校验交给 reconcile()，
    单条脏数据不应让整页解析失败。
    """
    assets: List[Dict[str, Any]] = Field(default_factory=list)
    descriptions: List[Dict[str, Any]] = Field(default_factory=list)
    total_inventory_count: int = 0
    more_items: bool = False
    last_assetid: Optional[str] = None

    @field_validator("assets", "descriptions", mode="before")
    @classmethod
    def _records(cls, v: Any) -> List[Dict[str, Any]]:
        if not isinstance(v, list):
            return []
        return [r for r in v if isinstance(r, dict)]

    @field_validator("total_inventory_count", mode="before")
    @classmethod
    def _count(cls, v: Any) -> int:
        try:
            return int(v)
        except (TypeError, ValueError):
            return 0

    @field_validator("more_items", mode="before")
    @classmethod
    def _more(cls, v: Any) -> bool:
        if isinstance(v, str):
            try:
                return bool(int(v))
            except ValueError:
                return False
        return bool(v)

    @field_validator("last_assetid", mode="before")
    @classmethod
    def _cursor(cls, v: Any) -> Optional[str]:
        if v is None or v == "":
            return None
        return str(v)


# ---------- 合并后的物品 ----------

NonEmptyStr = Annotated[str, StringConstraints(min_length=1)]


class InventoryItem(BaseModel):
    """
    asset + description 合并后的完整物品。

    必填字段全部校验通过才会构造成功，不存在"半个物品"。
    """
    model_config = ConfigDict(frozen=True)

    appid: int = Field(gt=0)
    contextid: NonEmptyStr
    assetid: NonEmptyStr
    classid: NonEmptyStr
    instanceid: NonEmptyStr
    amount: NonEmptyStr

    name: NonEmptyStr
    market_hash_name: NonEmptyStr   # 已 URL 编码
    market_name: NonEmptyStr
    type: NonEmptyStr
    icon_url: NonEmptyStr

    tradable: StrictInt
    marketable: StrictInt
    commodity: StrictInt
    market_tradable_restriction: StrictInt

    # 只要求是列表，元素原样透传给前端
    descriptions: List[Any]
    tags: List[Any]

    name_color: Optional[str] = None
    background_color: Optional[str] = None
    icon_url_large: Optional[str] = None
    actions: Optional[List[Any]] = None


# ---------- 接口响应 ----------

class InventoryPage(BaseModel):
    """GET /api/steam/inventory 成功响应"""
    model_config = ConfigDict(frozen=True)

    success: bool = True
    items: List[InventoryItem]
    total_count: int
    page: int
    limit: int
    total_pages: int
    has_more: bool
    next_cursor: Optional[str] = None
    catalog_id: str
    partition_id: str


class InventoryErrorOut(BaseModel):
    """失败响应；details 仅开发模式下出现"""
    success: bool = False
    error: str
    details: Optional[str] = None
    items: List[InventoryItem] = Field(default_factory=list)
    total_count: int = 0
