"""
版本输入分发

根据前缀约定把版本输入路由到对应的解析策略。
"""

from typing import List, Optional, Tuple

from loguru import logger

from mcfetch.models import DownloadTarget
from mcfetch.services.base import ResolutionStrategy


class Dispatcher:
    """版本输入分发器"""

    def __init__(
        self,
        default: ResolutionStrategy,
        prefixed: Optional[List[ResolutionStrategy]] = None,
    ):
        self.default = default
        self.prefixed = prefixed or []

    def route(self, token: str) -> Tuple[ResolutionStrategy, str]:
        """
        选择解析策略

        Args:
            token: 用户输入，例如 '1.18.2' 或 'forge:1.18.2'

        Returns:
            tuple: (策略, 去掉前缀后的输入)
        """
        for strategy in self.prefixed:
            if strategy.prefix and token.startswith(strategy.prefix):
                logger.debug(f"使用 {strategy.name} 策略解析 '{token}'")
                return strategy, token[len(strategy.prefix):]
        logger.debug(f"使用 {self.default.name} 策略解析 '{token}'")
        return self.default, token

    def is_listing(self, token: str) -> bool:
        strategy, spec = self.route(token)
        return strategy.is_listing(spec)

    async def list(self, token: str) -> List[str]:
        strategy, spec = self.route(token)
        return await strategy.list(spec)

    async def dispatch(self, token: str) -> DownloadTarget:
        """将输入解析为下载目标"""
        strategy, spec = self.route(token)
        return await strategy.resolve(spec)
