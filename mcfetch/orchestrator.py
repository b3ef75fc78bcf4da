"""
主协调器

整合服务层与下载层组件，实现 解析 -> 下载 -> 校验 的流程编排。
"""

import os
from typing import Optional

import aiohttp
from loguru import logger

from mcfetch.models import FetchOutcome, McFetchConfig, VerifyStatus
from mcfetch.services import (
    Dispatcher,
    ForgeStrategy,
    MetadataClient,
    VanillaStrategy,
)
from mcfetch.download import DownloadManager, FileVerifier
from mcfetch.exceptions import ChecksumMismatch


class McFetchOrchestrator:
    """McFetch 主协调器"""

    def __init__(
        self,
        config: McFetchConfig,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.config = config
        self._session = session
        self._owned_session = session is None

    def _create_session(self) -> aiohttp.ClientSession:
        transport = self.config.transport
        return aiohttp.ClientSession(
            headers=transport.session_headers(),
            timeout=transport.client_timeout(),
        )

    def build_dispatcher(self, client: MetadataClient) -> Dispatcher:
        endpoints = self.config.endpoints
        return Dispatcher(
            default=VanillaStrategy(client, endpoints),
            prefixed=[ForgeStrategy(client, endpoints)],
        )

    async def run(self, token: str) -> FetchOutcome:
        """
        运行完整流程

        Args:
            token: 版本输入

        Returns:
            FetchOutcome

        Raises:
            ChecksumMismatch: 下载文件校验失败（文件保留在磁盘上）
        """
        if self._session is None:
            self._session = self._create_session()

        try:
            client = MetadataClient(self._session, self.config.transport)
            dispatcher = self.build_dispatcher(client)

            if dispatcher.is_listing(token):
                return FetchOutcome(listing=await dispatcher.list(token))

            target = await dispatcher.dispatch(token)
            if self.config.output.dry_run:
                logger.info(f"[干运行模式] 解析完成: {target.url}")
                return FetchOutcome(target=target)

            return await self._download(target)
        finally:
            if self._owned_session and not self._session.closed:
                await self._session.close()

    async def _download(self, target) -> FetchOutcome:
        output = self.config.output
        file_path = os.path.join(output.directory, target.filename)

        logger.debug(f"下载 {target.filename}: {target.url}")
        manager = DownloadManager(self._session, self.config.transport)
        await manager.download(target.url, file_path, output.progress_visible)

        result = await FileVerifier.verify(file_path, target.checksum, target.algorithm)
        if result.status == VerifyStatus.MISMATCH:
            raise ChecksumMismatch(
                f"校验失败: {target.filename}",
                context={
                    "file": file_path,
                    "algorithm": target.algorithm.value,
                    "expected": result.expected,
                    "actual": result.actual,
                },
            )
        if result.skipped:
            logger.warning(f"{result.reason}：跳过校验")
        else:
            logger.debug(f"使用 {target.algorithm.value} 校验成功")

        logger.success(
            f"[完成] '{target.filename}' 下载完成 "
            f"({FileVerifier.get_size(file_path) / (1024 * 1024):.2f} MB)"
        )
        return FetchOutcome(target=target, path=file_path, verification=result)
