"""
原版服务端解析策略

通过版本清单定位版本元数据，取出 server.jar 的下载地址与 SHA1。
"""

from typing import List

from loguru import logger

from mcfetch.exceptions import UnknownVersion
from mcfetch.models import ChecksumAlgorithm, DownloadTarget, VersionManifest
from mcfetch.services.base import ResolutionStrategy
from mcfetch.utils import extract

SERVER_FILENAME = "server.jar"

# 关键字 -> 清单中的发布指针
POINTER_KEYWORDS = {
    "latest": "release",
    "latest-snapshot": "snapshot",
}

LIST_POINTER_KEYWORDS = {
    "list-latest": "release",
    "list-latest-snapshot": "snapshot",
}


class VanillaStrategy(ResolutionStrategy):
    """原版服务端解析策略"""

    name = "vanilla"

    def is_listing(self, spec: str) -> bool:
        return spec == "list" or spec in LIST_POINTER_KEYWORDS

    async def fetch_manifest(self) -> VersionManifest:
        """获取版本清单"""
        logger.debug(f"下载版本清单: {self.endpoints.manifest_url}")
        document = await self.client.fetch_object(self.endpoints.manifest_url)
        return VersionManifest.from_document(document)

    async def list(self, spec: str) -> List[str]:
        manifest = await self.fetch_manifest()
        if spec == "list":
            return manifest.ids()
        return [manifest.pointer(LIST_POINTER_KEYWORDS[spec])]

    async def resolve(self, spec: str) -> DownloadTarget:
        manifest = await self.fetch_manifest()

        if spec in POINTER_KEYWORDS:
            version = manifest.pointer(POINTER_KEYWORDS[spec])
        else:
            version = spec
        entry = manifest.find(version)
        if entry is None:
            raise UnknownVersion(version)
        logger.debug(f"找到版本 {version} (类型: {entry.type or '未知'})")

        logger.info(f"正在下载版本 {version}...")
        logger.debug(f"下载版本信息: {entry.url}")
        metadata = await self.client.fetch(entry.url)

        target = DownloadTarget(
            url=extract(metadata, "downloads.server.url"),
            checksum=extract(metadata, "downloads.server.sha1"),
            algorithm=ChecksumAlgorithm.SHA1,
            filename=SERVER_FILENAME,
        )
        logger.debug(f"server.jar 地址: {target.url}")
        return target
