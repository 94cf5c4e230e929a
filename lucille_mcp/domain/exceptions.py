"""统一业务异常模型。

BrainClient 只通过这些异常报告上游失败，
Gateway 在边界处统一捕获并归类为 ClassifiedError，再格式化为提示文本。
"""


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "NETWORK_ERROR"）。
        message: 错误信息；对 HTTP 错误而言即原始响应体。
        http_status: 上游返回的 HTTP 状态码，非 HTTP 错误时为 None。
        extra: 其他补充字段（例如 path）。
    """

    def __init__(self, code: str, message: str, http_status: int | None = None, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class NetworkError(BusinessError):
    """网络层错误，例如连接被拒绝、DNS 失败、超时等。"""


class ApiError(BusinessError):
    """Brain API 返回非 2xx 时抛出，message 保存原始响应体。"""

    @property
    def body(self) -> str:
        return self.message


class RateLimitError(ApiError):
    """Brain API 限流（429）。是否等待重试由调用方（Agent）决定。"""


class ResponseDecodeError(BusinessError):
    """2xx 响应体不是合法 JSON。"""
