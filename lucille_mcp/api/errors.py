"""上游失败归类。

把 BrainClient 抛出的任意异常映射为 ClassifiedError（封闭集合），
格式化层只依赖归类结果。
"""

import json
from typing import Any, Optional

from lucille_mcp.domain.exceptions import ApiError, BusinessError
from lucille_mcp.domain.models import ClassifiedError, ErrorKind


DEFAULT_RETRY_AFTER = 60

# 连接被拒绝时各层可能给出的错误信息
_REFUSAL_MARKERS = ("connection refused", "econnrefused", "fetch failed", "all connection attempts failed")


def parse_retry_after(body: Optional[str]) -> Any:
    """从 429 响应体中取 retry_after_seconds，取不到时返回默认 60 秒。"""

    try:
        parsed = json.loads(body or "")
    except ValueError:
        return DEFAULT_RETRY_AFTER
    wait = parsed.get("retry_after_seconds") if isinstance(parsed, dict) else None
    if isinstance(wait, str):
        try:
            wait = float(wait)
        except ValueError:
            return DEFAULT_RETRY_AFTER
    if isinstance(wait, bool) or not isinstance(wait, (int, float)) or wait <= 0:
        return DEFAULT_RETRY_AFTER
    return int(wait) if float(wait).is_integer() else wait


def is_connection_refused(err: BusinessError) -> bool:
    if err.code == "CONNECT_ERROR":
        return True
    text = (err.message or "").lower()
    return any(marker in text for marker in _REFUSAL_MARKERS)


def classify_error(exc: BaseException) -> ClassifiedError:
    """将异常归类为 ClassifiedError，永不抛出。"""

    if isinstance(exc, ApiError):
        status = exc.http_status
        body = exc.body or ""
        if status == 429:
            return ClassifiedError(
                kind=ErrorKind.RATE_LIMITED,
                retry_after=parse_retry_after(body),
                status=status,
                body=body,
            )
        if status == 400:
            return ClassifiedError(kind=ErrorKind.BAD_REQUEST, status=status, body=body)
        if status == 503:
            return ClassifiedError(kind=ErrorKind.UNAVAILABLE, status=status, body=body)
        return ClassifiedError(kind=ErrorKind.UNKNOWN_HTTP, status=status, body=body)
    if isinstance(exc, BusinessError):
        if is_connection_refused(exc):
            return ClassifiedError(kind=ErrorKind.UNREACHABLE, body=exc.message or "")
        return ClassifiedError(kind=ErrorKind.UNKNOWN_TRANSPORT, status=exc.http_status, body=exc.message or "")
    return ClassifiedError(kind=ErrorKind.UNKNOWN, body=str(exc))
