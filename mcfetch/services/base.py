from abc import ABC, abstractmethod
from typing import List

from mcfetch.models import DownloadTarget, EndpointConfig
from mcfetch.services.api_client import MetadataClient


class ResolutionStrategy(ABC):
    """
    版本解析策略基类。

    prefix 为空的策略处理所有未带前缀的输入。
    """

    name: str = ""
    prefix: str = ""

    def __init__(self, client: MetadataClient, endpoints: EndpointConfig):
        self.client = client
        self.endpoints = endpoints

    @abstractmethod
    def is_listing(self, spec: str) -> bool:
        """
        输入是否为列表类命令（只输出，不下载）。
        """
        pass

    @abstractmethod
    async def list(self, spec: str) -> List[str]:
        """
        执行列表类命令，返回要输出的行。
        """
        pass

    @abstractmethod
    async def resolve(self, spec: str) -> DownloadTarget:
        """
        将版本输入解析为下载目标。
        """
        pass
