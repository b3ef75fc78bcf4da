"""
McFetch - Minecraft 服务端 / Forge 安装器下载工具
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
