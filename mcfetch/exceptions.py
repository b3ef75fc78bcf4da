"""
McFetch 统一异常体系

提供分层的异常结构，支持错误代码、上下文信息和字典序列化。
"""

from typing import Any, Dict, Optional


class McFetchError(Exception):
    """McFetch 基础异常类"""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self._get_default_code()
        self.context = context or {}

    def _get_default_code(self) -> str:
        """获取默认错误代码"""
        return "E000"

    def to_dict(self) -> Dict[str, Any]:
        """将异常转换为字典格式"""
        return {
            "error": True,
            "code": self.code,
            "message": self.message,
            "context": self.context,
            "type": self.__class__.__name__,
        }

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ConfigError(McFetchError):
    """配置相关错误"""

    def _get_default_code(self) -> str:
        return "E100"


class ConfigParseError(ConfigError):
    """配置解析错误"""

    def _get_default_code(self) -> str:
        return "E101"


class ConfigValidationError(ConfigError):
    """配置验证错误"""

    def _get_default_code(self) -> str:
        return "E102"


class NetworkError(McFetchError):
    """网络传输错误（连接失败、超时、非 2xx 状态码）"""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        url: Optional[str] = None,
        status: Optional[int] = None,
    ):
        super().__init__(message, code, context)
        self.url = url
        self.status = status
        if url:
            self.context["url"] = url
        if status is not None:
            self.context["status_code"] = status

    def _get_default_code(self) -> str:
        return "E200"


class ParseError(McFetchError):
    """元数据解析错误"""

    def _get_default_code(self) -> str:
        return "E210"


class FieldNotFound(ParseError):
    """字段路径无法解析"""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        path: Optional[str] = None,
    ):
        super().__init__(message, code, context)
        self.path = path
        if path is not None:
            self.context["path"] = path

    def _get_default_code(self) -> str:
        return "E211"


class InvalidChecksumError(ParseError):
    """校验值与算法不符"""

    def _get_default_code(self) -> str:
        return "E212"


class ResolutionError(McFetchError):
    """版本解析错误"""

    def _get_default_code(self) -> str:
        return "E300"


class UnknownVersion(ResolutionError):
    """版本清单中不存在该版本"""

    def __init__(self, version: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(f"未知版本 '{version}'", context=context)
        self.version = version
        self.context["version"] = version

    def _get_default_code(self) -> str:
        return "E301"


class DownloadError(McFetchError):
    """下载相关错误"""

    def _get_default_code(self) -> str:
        return "E400"


class DownloadFileError(DownloadError):
    """下载文件操作错误"""

    def _get_default_code(self) -> str:
        return "E401"


class ChecksumMismatch(DownloadError):
    """下载校验错误"""

    def _get_default_code(self) -> str:
        return "E402"


__all__ = [
    # 基础异常
    "McFetchError",
    # 配置异常
    "ConfigError",
    "ConfigParseError",
    "ConfigValidationError",
    # 网络与解析异常
    "NetworkError",
    "ParseError",
    "FieldNotFound",
    "InvalidChecksumError",
    # 版本解析异常
    "ResolutionError",
    "UnknownVersion",
    # 下载异常
    "DownloadError",
    "DownloadFileError",
    "ChecksumMismatch",
]
