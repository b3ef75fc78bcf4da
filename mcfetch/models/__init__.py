"""
McFetch 数据模型包

包含配置模型和 API 模型定义。
"""

from mcfetch.models.config import (
    EndpointConfig,
    TransportConfig,
    OutputConfig,
    McFetchConfig,
)
from mcfetch.models.api import (
    ChecksumAlgorithm,
    VerifyStatus,
    ManifestEntry,
    VersionManifest,
    PromotionTable,
    DownloadTarget,
    VerifyResult,
    FetchOutcome,
)

__all__ = [
    # 配置模型
    "EndpointConfig",
    "TransportConfig",
    "OutputConfig",
    "McFetchConfig",
    # API 模型
    "ChecksumAlgorithm",
    "VerifyStatus",
    "ManifestEntry",
    "VersionManifest",
    "PromotionTable",
    "DownloadTarget",
    "VerifyResult",
    "FetchOutcome",
]
