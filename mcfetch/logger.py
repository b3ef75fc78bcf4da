"""
日志模块

使用 loguru 提供统一的日志记录功能。
"""

import os
import sys
from typing import Optional

from loguru import logger


def resolve_level(quiet: bool = False, verbose: bool = False) -> str:
    """
    根据命令行开关计算日志级别

    MCFETCH_DEBUG=1 时始终为 DEBUG；verbose 优先于 quiet。
    """
    if os.environ.get("MCFETCH_DEBUG", "0") == "1" or verbose:
        return "DEBUG"
    if quiet:
        return "WARNING"
    return "INFO"


def setup_logger(
    level: Optional[str] = None,
    sink=None,
    enqueue: bool = False,
    colorize: Optional[bool] = None,
) -> None:
    """
    设置日志记录器

    Args:
        level: 日志级别 (DEBUG, INFO, WARNING, ERROR)
        sink: 输出目标，默认 stderr（stdout 留给列表输出）
        enqueue: 是否启用队列
        colorize: 是否启用颜色，None 时按终端自动判断
    """
    if level is None:
        level = resolve_level()

    # 移除默认处理器
    logger.remove()

    logger.add(
        sink=sink if sink is not None else sys.stderr,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message}",
        enqueue=enqueue,
        level=level,
        colorize=colorize,
        backtrace=(level == "DEBUG"),
        diagnose=(level == "DEBUG"),
    )

    if level == "DEBUG":
        logger.debug("DEBUG 模式已启用")


__all__ = ["logger", "setup_logger", "resolve_level"]
