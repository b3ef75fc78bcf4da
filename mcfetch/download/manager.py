"""
下载管理器

将下载地址的响应体流式写入本地文件。
"""

import asyncio
import os
from dataclasses import dataclass
from typing import Callable, Optional

import aiohttp
import aiofiles
from loguru import logger

from mcfetch.exceptions import DownloadFileError, NetworkError
from mcfetch.models import TransportConfig


@dataclass
class DownloadStats:
    """下载统计"""

    total_size: int = 0
    bytes_downloaded: int = 0


class DownloadManager:
    """下载管理器"""

    CHUNK_SIZE = 8192

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        transport: Optional[TransportConfig] = None,
        progress_callback: Optional[Callable[[str, float], None]] = None,
    ):
        self.transport = transport or TransportConfig()
        self.stats = DownloadStats()
        self._session = session
        self._owned_session = session is None
        self._progress_callback = progress_callback

    @property
    def session(self) -> aiohttp.ClientSession:
        """获取或创建 aiohttp session"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers=self.transport.session_headers(),
                timeout=self.transport.client_timeout(),
            )
        return self._session

    async def download(
        self, url: str, file_path: str, progress_visible: bool = True
    ) -> str:
        """
        下载单个文件

        目标文件会被创建或截断。下载失败时不清理已写入的部分文件。

        Args:
            url: 下载地址
            file_path: 目标文件路径
            progress_visible: 是否输出下载进度

        Returns:
            目标文件路径

        Raises:
            NetworkError: 连接失败、超时或非 2xx 状态码
            DownloadFileError: 本地文件写入失败
        """
        filename = os.path.basename(file_path)
        directory = os.path.dirname(file_path)
        self.stats = DownloadStats()

        try:
            if directory:
                os.makedirs(directory, exist_ok=True)

            async with self.session.get(
                url, **self.transport.request_kwargs()
            ) as response:
                if not 200 <= response.status < 300:
                    raise NetworkError(
                        f"下载失败 (状态码: {response.status}): {url}",
                        url=url,
                        status=response.status,
                    )

                total_size = int(response.headers.get("Content-Length", 0) or 0)
                self.stats.total_size = total_size
                if progress_visible and total_size > 0:
                    logger.info(
                        f"[信息] 文件大小: {total_size / (1024 * 1024):.2f} MB"
                    )

                async with aiofiles.open(file_path, "wb") as f:
                    downloaded = 0
                    last_percent = 0.0

                    async for chunk in response.content.iter_chunked(self.CHUNK_SIZE):
                        await f.write(chunk)
                        downloaded += len(chunk)
                        self.stats.bytes_downloaded = downloaded

                        if progress_visible and total_size > 0:
                            percent = (downloaded / total_size) * 100
                            if percent - last_percent >= 5:
                                if self._progress_callback:
                                    self._progress_callback(filename, percent)
                                logger.info(f"[进度] {filename}: {percent:.1f}%")
                                last_percent = percent

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(
                f"下载失败: {url} ({e.__class__.__name__}: {e})", url=url
            ) from e
        except OSError as e:
            raise DownloadFileError(
                f"写入文件失败: {file_path}",
                context={"file": file_path, "error": str(e)},
            ) from e

        logger.debug(f"[完成] '{filename}' 下载完成 ({self.stats.bytes_downloaded} 字节)")
        return file_path

    async def close(self):
        """关闭 session"""
        if self._owned_session and self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        """异步上下文管理器入口"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """异步上下文管理器出口"""
        await self.close()
