"""
Steam 登录会话校验（适配层）

登录流程由前端/OpenID 回调负责，这里只读取它写入的 steam_session Cookie：
  {"steamid": "7656119...", "personaname": "...", "avatar": "...", "expires_at": 1760000000}
"""

from __future__ import annotations

import json
import logging
import time
from typing import Optional

from fastapi import Request
from pydantic import BaseModel, ValidationError, field_validator

from app.core.config import settings
from app.core.errors import AuthError

logger = logging.getLogger(__name__)


def is_steam_id(value: str) -> bool:
    """SteamID64 只含 ASCII 数字；会拼进上游 URL 路径，不能放过其他字符"""
    return value.isascii() and value.isdigit()


class SteamSession(BaseModel):
    steamid: Optional[str] = None
    personaname: Optional[str] = None
    avatar: Optional[str] = None
    expires_at: Optional[int] = None
    created_at: Optional[int] = None

    @field_validator("steamid", mode="before")
    @classmethod
    def _steamid(cls, v):
        if v is None or v == "":
            return None
        v = str(v)
        if not is_steam_id(v):
            raise ValueError("steamid must be numeric")
        return v


def validate_session(raw: Optional[str], now: Optional[float] = None) -> SteamSession:
    """解析并校验 Cookie 内容；缺失 → Unauthorized，格式错误/过期 → Invalid session"""
    if not raw:
        raise AuthError("Unauthorized")

    try:
        data = json.loads(raw)
    except ValueError:
        raise AuthError("Invalid session")
    if not isinstance(data, dict):
        raise AuthError("Invalid session")

    try:
        session = SteamSession.model_validate(data)
    except ValidationError:
        raise AuthError("Invalid session")

    now = time.time() if now is None else now
    if session.expires_at is not None and session.expires_at <= now:
        raise AuthError("Invalid session")
    if (
        settings.session_max_age
        and session.created_at is not None
        and now - session.created_at > settings.session_max_age
    ):
        raise AuthError("Invalid session")
    return session


async def get_session(request: Request) -> SteamSession:
    """FastAPI 依赖：从 Cookie 取会话"""
    session = validate_session(request.cookies.get(settings.session_cookie_name))
    logger.debug("session ok: steamid=%s", session.steamid)
    return session
