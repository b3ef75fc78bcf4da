"""
Forge 安装器解析策略

通过推广表把简写版本解析为完整版本号（<mc>-<forge>），
再从版本元数据中取出安装器的 MD5。
"""

import json
from typing import Callable, List, Optional, Tuple

from loguru import logger

from mcfetch.models import ChecksumAlgorithm, DownloadTarget, PromotionTable
from mcfetch.services.base import ResolutionStrategy
from mcfetch.utils import extract, flatten, numeric_prefix

# 推广匹配函数：命中时返回完整版本号，否则返回 None
PromotionMatcher = Callable[[str, PromotionTable], Optional[str]]


def match_exact(spec: str, promotions: PromotionTable) -> Optional[str]:
    """推广键与输入完全一致，例如 '1.18.2-recommended'"""
    build = promotions.lookup(spec)
    if build is None:
        return None
    return f"{numeric_prefix(spec)}-{build}"


def match_latest(spec: str, promotions: PromotionTable) -> Optional[str]:
    """输入加上 '-latest' 后缀后命中推广键"""
    build = promotions.lookup(f"{spec}-latest")
    if build is None:
        return None
    return f"{spec}-{build}"


def match_passthrough(spec: str, promotions: PromotionTable) -> Optional[str]:
    """输入本身即为完整版本号"""
    return spec


PROMOTION_MATCHERS: Tuple[PromotionMatcher, ...] = (
    match_exact,
    match_latest,
    match_passthrough,
)


def resolve_long_version(
    spec: str,
    promotions: PromotionTable,
    matchers: Tuple[PromotionMatcher, ...] = PROMOTION_MATCHERS,
) -> str:
    """按顺序尝试匹配，第一个命中的结果即为最终版本号"""
    for matcher in matchers:
        long_version = matcher(spec, promotions)
        if long_version is not None:
            logger.debug(f"{matcher.__name__}: '{spec}' -> '{long_version}'")
            return long_version
    return spec


class ForgeStrategy(ResolutionStrategy):
    """Forge 安装器解析策略"""

    name = "forge"
    prefix = "forge:"

    def is_listing(self, spec: str) -> bool:
        return spec == "list"

    async def fetch_promotions(self) -> PromotionTable:
        """获取推广表"""
        url = self.endpoints.forge_promotions_url
        logger.debug(f"下载 Forge 推广表: {url}")
        document = await self.client.fetch_object(url)
        return PromotionTable.from_document(document)

    async def list(self, spec: str) -> List[str]:
        promotions = await self.fetch_promotions()
        logger.debug(f"下载 Forge 版本索引: {self.endpoints.forge_index_url}")
        index = await self.client.fetch(self.endpoints.forge_index_url)
        # 与 jq -r 相同：字符串原样输出，其余值输出为 JSON
        versions = [
            version if isinstance(version, str) else json.dumps(version)
            for version in flatten(index)
        ]
        return versions + promotions.keys()

    def installer_filename(self, long_version: str) -> str:
        return f"{self.endpoints.forge_artifact}-{long_version}-installer.jar"

    async def resolve(self, spec: str) -> DownloadTarget:
        promotions = await self.fetch_promotions()
        long_version = resolve_long_version(spec, promotions)
        logger.info(f"正在下载 Forge {long_version}...")

        meta_url = self.endpoints.forge_meta_url.format(long_version=long_version)
        logger.debug(f"下载 Forge 版本信息: {meta_url}")
        metadata = await self.client.fetch(meta_url)

        # classifiers.installer.jar 记录的是安装器的 MD5
        installer_md5 = extract(metadata, "classifiers.installer.jar")
        logger.debug(f"MD5 校验值为 {installer_md5}")

        filename = self.installer_filename(long_version)
        return DownloadTarget(
            url=self.endpoints.forge_installer_url.format(
                long_version=long_version, filename=filename
            ),
            checksum=installer_md5,
            algorithm=ChecksumAlgorithm.MD5,
            filename=filename,
        )
