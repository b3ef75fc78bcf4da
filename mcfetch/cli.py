"""
CLI 模块

命令行接口实现。
"""

import asyncio
import json
from pathlib import Path
from typing import Optional

import click
import toml
import yaml
from loguru import logger

from mcfetch import __version__
from mcfetch.models import McFetchConfig, FetchOutcome
from mcfetch.orchestrator import McFetchOrchestrator
from mcfetch.exceptions import ConfigParseError, McFetchError
from mcfetch.logger import resolve_level, setup_logger

HELP = """下载指定版本的 Minecraft server.jar 或 Forge 安装器

\b
VERSION 可以是版本号（如 '1.18.2'），也可以是
'latest'、'latest-snapshot'、'list'、'list-latest' 或 'list-latest-snapshot'

\b
Forge 安装器使用 'forge:' 前缀，例如
'forge:1.18.2'、'forge:1.18.2-40.1.80' 或 'forge:list'
"""


def load_config(config_path: str) -> dict:
    """加载配置文件"""
    path = Path(config_path)
    suffix = path.suffix.lower()

    try:
        if suffix == ".toml":
            return toml.load(config_path)
        elif suffix == ".json":
            return json.loads(path.read_text(encoding="utf-8"))
        elif suffix in (".yaml", ".yml"):
            return yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (toml.TomlDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigParseError(
            f"配置文件解析失败: {config_path}", context={"error": str(e)}
        ) from e

    raise ConfigParseError(f"不支持的配置文件格式: {suffix}")


def parse_header(value: str) -> tuple[str, str]:
    """解析 'Name: value' 形式的请求头"""
    name, sep, content = value.partition(":")
    if not sep or not name.strip():
        raise click.BadParameter(f"请求头格式应为 'Name: value'，得到: {value!r}")
    return name.strip(), content.strip()


def build_config(
    config_path: Optional[str],
    quiet: bool,
    verbose: bool,
    output_dir: Optional[str],
    timeout: Optional[float],
    proxy: Optional[str],
    headers: tuple,
    insecure: bool,
    dry_run: bool,
) -> McFetchConfig:
    """合并配置文件与命令行参数，命令行优先"""
    config_dict = load_config(config_path) if config_path else {}
    config = McFetchConfig.from_dict(config_dict)

    output = config.output
    output.quiet = output.quiet or quiet
    output.verbose = output.verbose or verbose
    output.dry_run = output.dry_run or dry_run
    if output_dir:
        output.directory = output_dir

    transport = config.transport
    if timeout is not None:
        transport.timeout = timeout
    if proxy:
        transport.proxy = proxy
    if insecure:
        transport.insecure = True
    for header in headers:
        name, content = parse_header(header)
        transport.headers[name] = content

    return config


def echo_outcome(outcome: FetchOutcome):
    """向 stdout 输出列表或干运行结果"""
    if outcome.is_listing:
        for line in outcome.listing:
            click.echo(line)
    elif outcome.path is None:
        target = outcome.target
        click.echo(target.url)
        click.echo(f"{target.algorithm.value} {target.checksum} {target.filename}")


async def run_async(token: str, config: McFetchConfig) -> FetchOutcome:
    """异步运行"""
    orchestrator = McFetchOrchestrator(config)
    return await orchestrator.run(token)


@click.command(help=HELP, context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("token", metavar="VERSION")
@click.option("-q", "--quiet", is_flag=True, help="不输出进度与提示信息")
@click.option("-v", "--verbose", is_flag=True, help="输出更详细的信息")
@click.option(
    "-o",
    "--output-dir",
    type=click.Path(file_okay=False),
    help="下载目录（默认当前目录）",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="配置文件（.toml/.json/.yaml）",
)
@click.option("--timeout", type=click.FloatRange(min=0, min_open=True), help="连接与读取超时（秒）")
@click.option("--proxy", help="HTTP 代理地址")
@click.option("-H", "--header", "headers", multiple=True, help="附加请求头 'Name: value'（可多次使用）")
@click.option("--insecure", is_flag=True, help="不校验 TLS 证书")
@click.option("--dry-run", is_flag=True, help="干运行模式（只解析，不下载）")
@click.version_option(version=__version__)
def main(
    token: str,
    quiet: bool,
    verbose: bool,
    output_dir: Optional[str],
    config_path: Optional[str],
    timeout: Optional[float],
    proxy: Optional[str],
    headers: tuple,
    insecure: bool,
    dry_run: bool,
):
    setup_logger(level=resolve_level(quiet=quiet, verbose=verbose))

    try:
        config = build_config(
            config_path,
            quiet,
            verbose,
            output_dir,
            timeout,
            proxy,
            headers,
            insecure,
            dry_run,
        )
        if config_path:
            # 配置文件中的 quiet / verbose 也参与日志级别计算
            setup_logger(
                level=resolve_level(
                    quiet=config.output.quiet, verbose=config.output.verbose
                )
            )
        outcome = asyncio.run(run_async(token, config))
    except McFetchError as e:
        logger.debug(f"错误详情: {e.to_dict()}")
        raise click.ClickException(str(e))
    except click.ClickException:
        raise
    except Exception as e:
        logger.exception(f"运行时错误: {e}")
        raise click.ClickException(f"运行时错误: {e}")

    echo_outcome(outcome)


if __name__ == "__main__":
    main()
