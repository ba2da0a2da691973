"""goldprice核心异常类."""

from typing import Any


class GoldPriceError(Exception):
    """goldprice基础异常类."""

    def __init__(
        self,
        message: str,
        error_code: str = "GENERAL_ERROR",
        details: dict[str, Any] | None = None,
    ):
        """初始化异常.

        Args:
            message: 错误消息
            error_code: 错误代码
            details: 额外详情
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class SourceError(GoldPriceError):
    """行情数据源相关异常."""

    def __init__(
        self,
        message: str,
        provider_name: str,
        error_code: str = "SOURCE_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, error_code, details)
        self.provider_name = provider_name


class PayloadParseError(SourceError):
    """数据源返回内容无法解析."""

    def __init__(
        self,
        message: str,
        provider_name: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if field:
            super_details["field"] = field
        super().__init__(message, provider_name, "PARSE_ERROR", super_details)
        self.field = field


class ConfigurationError(GoldPriceError):
    """配置加载异常."""

    def __init__(
        self,
        message: str,
        config_path: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if config_path:
            super_details["config_path"] = config_path
        super().__init__(message, "CONFIG_ERROR", super_details)


class DataValidationError(GoldPriceError):
    """数据验证异常."""

    def __init__(
        self,
        message: str,
        validation_errors: dict[str, Any] | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if validation_errors:
            super_details["validation_errors"] = validation_errors
        super().__init__(message, "VALIDATION_ERROR", super_details)
        self.validation_errors = validation_errors or {}
