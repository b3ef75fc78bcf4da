"""
API 数据模型

定义版本清单、推广表、下载目标与校验结果等数据类。
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from mcfetch.exceptions import FieldNotFound, InvalidChecksumError, ParseError
from mcfetch.utils import extract, quote_key


class ChecksumAlgorithm(Enum):
    """校验算法"""

    SHA1 = "sha1"
    MD5 = "md5"

    @property
    def hex_length(self) -> int:
        """十六进制摘要长度"""
        return {"sha1": 40, "md5": 32}[self.value]


class VerifyStatus(Enum):
    """校验结果状态"""

    VERIFIED = "verified"
    MISMATCH = "mismatch"
    SKIPPED = "skipped"


@dataclass
class ManifestEntry:
    """版本清单中的单个条目"""

    id: str
    url: str
    type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "ManifestEntry":
        return cls(
            id=extract(data, "id"),
            url=extract(data, "url"),
            type=data.get("type"),
        )


@dataclass
class VersionManifest:
    """
    顶层版本清单。

    entries 保持清单中的发布顺序。
    """

    latest: Dict[str, str]
    entries: List[ManifestEntry]

    @classmethod
    def from_document(cls, document: Any) -> "VersionManifest":
        """将版本清单 JSON 转换为 VersionManifest 对象"""
        latest = extract(document, "latest")
        if not isinstance(latest, dict):
            raise ParseError("版本清单中的 latest 字段不是对象")
        entries = [ManifestEntry.from_dict(item) for item in extract(document, "versions[]")]
        return cls(latest=latest, entries=entries)

    def ids(self) -> List[str]:
        """按清单顺序返回所有版本 ID"""
        return [entry.id for entry in self.entries]

    def pointer(self, name: str) -> str:
        """获取发布指针（release / snapshot）指向的版本 ID"""
        if name not in self.latest:
            raise FieldNotFound(f"字段不存在: latest.{name}", path=f"latest.{name}")
        return self.latest[name]

    def find(self, version: str) -> Optional[ManifestEntry]:
        """精确查找版本条目"""
        for entry in self.entries:
            if entry.id == version:
                return entry
        return None


@dataclass
class PromotionTable:
    """模组加载器推广表（推广键 -> 构建号）"""

    promos: Dict[str, Any]

    @classmethod
    def from_document(cls, document: Any) -> "PromotionTable":
        promos = extract(document, "promos")
        if not isinstance(promos, dict):
            raise ParseError("推广表中的 promos 字段不是对象")
        return cls(promos=promos)

    def lookup(self, key: str) -> Optional[str]:
        """
        查找推广键

        缺失或为 null 的键都视为不存在。
        """
        try:
            build = extract(self.promos, quote_key(key))
        except FieldNotFound:
            return None
        if build is None:
            return None
        return str(build)

    def keys(self) -> List[str]:
        """按字典序返回所有推广键"""
        return sorted(self.promos)


_HEX_RE = re.compile(r"[0-9a-f]+")


@dataclass
class DownloadTarget:
    """
    解析得到的下载目标。

    校验值会被规范化为小写，且长度必须与算法一致。
    """

    url: str
    checksum: str
    algorithm: ChecksumAlgorithm
    filename: str

    def __post_init__(self):
        if not isinstance(self.url, str) or not self.url:
            raise ParseError(
                f"下载地址无效: {self.url!r}", context={"filename": self.filename}
            )
        if not isinstance(self.algorithm, ChecksumAlgorithm):
            self.algorithm = ChecksumAlgorithm(self.algorithm)
        if not isinstance(self.checksum, str):
            raise InvalidChecksumError(
                f"{self.algorithm.value} 校验值不是字符串: {self.checksum!r}",
                context={"filename": self.filename},
            )
        self.checksum = self.checksum.strip().lower()
        if (
            len(self.checksum) != self.algorithm.hex_length
            or not _HEX_RE.fullmatch(self.checksum)
        ):
            raise InvalidChecksumError(
                f"{self.algorithm.value} 校验值无效: '{self.checksum}' "
                f"(需要 {self.algorithm.hex_length} 位十六进制)",
                context={"filename": self.filename, "checksum": self.checksum},
            )


@dataclass
class VerifyResult:
    """文件校验结果"""

    status: VerifyStatus
    algorithm: ChecksumAlgorithm
    expected: str
    actual: Optional[str] = None
    reason: Optional[str] = None

    @property
    def verified(self) -> bool:
        return self.status == VerifyStatus.VERIFIED

    @property
    def skipped(self) -> bool:
        return self.status == VerifyStatus.SKIPPED


@dataclass
class FetchOutcome:
    """单次运行的结果：列表输出，或下载目标及其校验结果"""

    listing: List[str] = field(default_factory=list)
    target: Optional[DownloadTarget] = None
    path: Optional[str] = None
    verification: Optional[VerifyResult] = None

    @property
    def is_listing(self) -> bool:
        return self.target is None
