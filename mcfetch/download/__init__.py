"""
McFetch 下载层

包含文件下载与校验功能。
"""

from mcfetch.download.manager import DownloadManager, DownloadStats
from mcfetch.download.verifier import FileVerifier

__all__ = [
    "DownloadManager",
    "DownloadStats",
    "FileVerifier",
]
