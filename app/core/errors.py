"""
库存聚合服务的异常体系

  InventoryError      基类，携带 HTTP 状态码与对外的通用错误文案
  ├─ AuthError        401  会话缺失或无效
  ├─ BadRequestError  400  无法确定目标 Steam ID
  ├─ UpstreamError    500  Steam 返回了显式 error 字段
  └─ TransportError   500  网络错误 / 超时 / 非 2xx

对外只暴露 public_message；str(exc) 是诊断信息，仅在开发模式下写入 details。
"""

from __future__ import annotations

from typing import Optional

FETCH_FAILED = "Failed to fetch inventory"


class InventoryError(RuntimeError):
    status_code: int = 500
    public_message: str = FETCH_FAILED


class AuthError(InventoryError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)
        self.public_message = message


class BadRequestError(InventoryError):
    status_code = 400

    def __init__(self, message: str = "Steam ID required"):
        super().__init__(message)
        self.public_message = message


class UpstreamError(InventoryError):
    """2xx 响应体中带有 error 字段（如私密库存）"""

    def __init__(self, upstream_message: str):
        super().__init__(f"Steam API error: {upstream_message}")
        self.upstream_message = upstream_message


class TransportError(InventoryError):
    """请求未拿到可用响应：连接失败、超时、非 2xx 或响应体不是 JSON 对象"""

    def __init__(self, message: str, upstream_status: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.upstream_status = upstream_status
        self.body = body
