"""
配置模型

定义元数据端点、网络传输与输出相关的配置数据类。
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import aiohttp

from mcfetch import __version__
from mcfetch.exceptions import ConfigValidationError

DEFAULT_USER_AGENT = f"mcfetch/{__version__}"


def _get_bool(data: dict, key: str, default: bool = False) -> bool:
    """读取布尔配置项，拒绝 "false" 之类的字符串"""
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ConfigValidationError(f"{key} 必须是布尔值: {value!r}")
    return value


@dataclass
class EndpointConfig:
    """远程元数据端点"""

    manifest_url: str = "https://launchermeta.mojang.com/mc/game/version_manifest.json"
    forge_promotions_url: str = (
        "https://files.minecraftforge.net/net/minecraftforge/forge/promotions_slim.json"
    )
    forge_index_url: str = (
        "https://files.minecraftforge.net/net/minecraftforge/forge/maven-metadata.json"
    )
    forge_meta_url: str = (
        "https://files.minecraftforge.net/net/minecraftforge/forge/{long_version}/meta.json"
    )
    forge_installer_url: str = (
        "https://maven.minecraftforge.net/net/minecraftforge/forge/{long_version}/{filename}"
    )
    forge_artifact: str = "forge"

    @classmethod
    def from_dict(cls, data: dict) -> "EndpointConfig":
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigValidationError(
                f"未知的端点配置项: {', '.join(sorted(unknown))}"
            )
        return cls(**data)


@dataclass
class TransportConfig:
    """网络传输配置"""

    timeout: Optional[float] = 30.0
    proxy: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)
    insecure: bool = False
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_dict(cls, data: dict) -> "TransportConfig":
        timeout = data.get("timeout", 30.0)
        if timeout is not None:
            try:
                timeout = float(timeout)
            except (TypeError, ValueError):
                raise ConfigValidationError(f"timeout 必须是数字: {timeout!r}")
            if timeout <= 0:
                raise ConfigValidationError("timeout 必须大于 0")

        headers = data.get("headers", {}) or {}
        if not isinstance(headers, dict):
            raise ConfigValidationError("headers 必须是键值表")

        return cls(
            timeout=timeout,
            proxy=data.get("proxy"),
            headers={str(k): str(v) for k, v in headers.items()},
            insecure=_get_bool(data, "insecure"),
            user_agent=data.get("user_agent", DEFAULT_USER_AGENT),
        )

    def client_timeout(self) -> aiohttp.ClientTimeout:
        """
        构造 aiohttp 超时

        只限制连接与单次读取，不限制总时长，避免大文件被中断。
        """
        if self.timeout is None:
            return aiohttp.ClientTimeout(total=None)
        return aiohttp.ClientTimeout(
            total=None, connect=self.timeout, sock_read=self.timeout
        )

    def session_headers(self) -> Dict[str, str]:
        return {"User-Agent": self.user_agent, **self.headers}

    def request_kwargs(self) -> Dict[str, Any]:
        """每次请求附带的参数"""
        kwargs: Dict[str, Any] = {}
        if self.proxy:
            kwargs["proxy"] = self.proxy
        if self.insecure:
            kwargs["ssl"] = False
        return kwargs


@dataclass
class OutputConfig:
    """输出配置"""

    directory: str = "."
    quiet: bool = False
    verbose: bool = False
    dry_run: bool = False

    @property
    def progress_visible(self) -> bool:
        return not self.quiet

    @classmethod
    def from_dict(cls, data: dict) -> "OutputConfig":
        return cls(
            directory=str(data.get("directory", ".")),
            quiet=_get_bool(data, "quiet"),
            verbose=_get_bool(data, "verbose"),
            dry_run=_get_bool(data, "dry_run"),
        )


@dataclass
class McFetchConfig:
    """McFetch 完整配置"""

    endpoints: EndpointConfig = field(default_factory=EndpointConfig)
    transport: TransportConfig = field(default_factory=TransportConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    @classmethod
    def from_dict(cls, data: dict) -> "McFetchConfig":
        """从字典（配置文件内容）创建配置"""
        if not isinstance(data, dict):
            raise ConfigValidationError("配置文件顶层必须是键值表")

        sections = {}
        for name in ("endpoints", "transport", "output"):
            section = data.get(name, {}) or {}
            if not isinstance(section, dict):
                raise ConfigValidationError(f"配置项 '{name}' 必须是键值表")
            sections[name] = section

        return cls(
            endpoints=EndpointConfig.from_dict(sections["endpoints"]),
            transport=TransportConfig.from_dict(sections["transport"]),
            output=OutputConfig.from_dict(sections["output"]),
        )
