"""
McFetch 服务层

包含业务逻辑服务：元数据客户端、版本解析策略、输入分发。
"""

from mcfetch.services.api_client import MetadataClient
from mcfetch.services.base import ResolutionStrategy
from mcfetch.services.vanilla import VanillaStrategy
from mcfetch.services.forge import ForgeStrategy, resolve_long_version
from mcfetch.services.dispatcher import Dispatcher

__all__ = [
    "MetadataClient",
    "ResolutionStrategy",
    "VanillaStrategy",
    "ForgeStrategy",
    "resolve_long_version",
    "Dispatcher",
]
