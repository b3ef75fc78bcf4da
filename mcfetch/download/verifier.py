"""
文件校验器

按指定算法重新计算文件摘要，并与期望值比较。
"""

import hashlib
import os
from typing import Optional

import aiofiles
from loguru import logger

from mcfetch.exceptions import DownloadFileError
from mcfetch.models import ChecksumAlgorithm, VerifyResult, VerifyStatus


class FileVerifier:
    """文件校验器"""

    CHUNK_SIZE = 65536

    @staticmethod
    def new_hasher(algorithm: ChecksumAlgorithm):
        """
        创建摘要对象

        Returns:
            hashlib 摘要对象；当前解释器不支持该算法时返回 None
        """
        try:
            return hashlib.new(algorithm.value)
        except ValueError:
            # 例如启用 FIPS 的 OpenSSL 会禁用 MD5
            return None

    @staticmethod
    async def calc_digest(file_path: str, algorithm: ChecksumAlgorithm) -> Optional[str]:
        """
        计算文件摘要

        Args:
            file_path: 文件路径
            algorithm: 校验算法

        Returns:
            十六进制摘要；算法不可用时返回 None

        Raises:
            DownloadFileError: 文件不存在或无法读取
        """
        hasher = FileVerifier.new_hasher(algorithm)
        if hasher is None:
            return None

        try:
            async with aiofiles.open(file_path, "rb") as f:
                while True:
                    data = await f.read(FileVerifier.CHUNK_SIZE)
                    if not data:
                        break
                    hasher.update(data)
        except OSError as e:
            raise DownloadFileError(
                f"无法读取文件: {file_path}",
                context={"file": file_path, "error": str(e)},
            ) from e
        return hasher.hexdigest()

    @staticmethod
    async def verify(
        file_path: str, expected: str, algorithm: ChecksumAlgorithm
    ) -> VerifyResult:
        """
        校验文件摘要

        Args:
            file_path: 文件路径
            expected: 期望的十六进制摘要
            algorithm: 校验算法

        Returns:
            VerifyResult（VERIFIED / MISMATCH / SKIPPED）
        """
        if not os.path.isfile(file_path):
            raise DownloadFileError(
                f"待校验的文件不存在: {file_path}", context={"file": file_path}
            )

        expected = expected.strip().lower()
        actual = await FileVerifier.calc_digest(file_path, algorithm)
        if actual is None:
            reason = f"当前 Python 环境不支持 {algorithm.value} 摘要"
            return VerifyResult(
                status=VerifyStatus.SKIPPED,
                algorithm=algorithm,
                expected=expected,
                reason=reason,
            )

        status = VerifyStatus.VERIFIED if actual == expected else VerifyStatus.MISMATCH
        logger.debug(f"[校验] {os.path.basename(file_path)}: {algorithm.value}={actual}")
        return VerifyResult(
            status=status, algorithm=algorithm, expected=expected, actual=actual
        )

    @staticmethod
    def get_size(file_path: str) -> int:
        """获取文件大小"""
        try:
            return os.path.getsize(file_path)
        except (IOError, OSError):
            return 0
