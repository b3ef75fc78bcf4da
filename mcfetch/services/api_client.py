"""
元数据客户端

通过 HTTP GET 获取远程 JSON 元数据文档。
"""

import asyncio
import json
from typing import Any, Dict, Optional

import aiohttp
from loguru import logger

from mcfetch.exceptions import NetworkError, ParseError
from mcfetch.models import TransportConfig


class MetadataClient:
    """元数据 API 客户端"""

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        transport: Optional[TransportConfig] = None,
    ):
        self._session = session
        self._owned_session = session is None
        self.transport = transport or TransportConfig()

    @property
    def session(self) -> aiohttp.ClientSession:
        """获取或创建 aiohttp session"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers=self.transport.session_headers(),
                timeout=self.transport.client_timeout(),
            )
        return self._session

    async def fetch(self, url: str) -> Any:
        """
        获取并解析 JSON 文档

        Args:
            url: 元数据地址

        Returns:
            解析后的文档

        Raises:
            NetworkError: 连接失败、超时或非 2xx 状态码
            ParseError: 响应体不是合法的 JSON
        """
        logger.debug(f"[请求] GET {url}")
        try:
            async with self.session.get(
                url, **self.transport.request_kwargs()
            ) as response:
                if not 200 <= response.status < 300:
                    raise NetworkError(
                        f"请求失败 (状态码: {response.status}): {url}",
                        url=url,
                        status=response.status,
                    )
                # 部分端点不返回 application/json，不检查 Content-Type
                body = await response.read()
            return json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ParseError(
                f"无法解析 JSON 响应: {url}", context={"url": url, "error": str(e)}
            ) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(
                f"网络请求失败: {url} ({e.__class__.__name__}: {e})", url=url
            ) from e

    async def fetch_object(self, url: str) -> Dict[str, Any]:
        """获取 JSON 文档，并要求顶层为对象"""
        document = await self.fetch(url)
        if not isinstance(document, dict):
            raise ParseError(
                f"响应顶层不是 JSON 对象: {url}", context={"url": url}
            )
        return document

    async def close(self):
        """关闭客户端"""
        if self._owned_session and self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        """异步上下文管理器入口"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """异步上下文管理器出口"""
        await self.close()
