# src/routeros_core/main.py
"""
RouterOS API 命令行入口。

用法示例:
    routeros-core --config config.toml /system/resource/print
    routeros-core --env-file .env /ip/address/print ?interface=ether1

未指定 --config 时从 ROUTEROS_* 环境变量 (及可选的 .env 文件) 加载配置。
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from .config import RouterosConfig, load_config_from_env, load_config_from_toml
from .core import open_connection
from .exceptions import ConfigError, NetworkError, RouterosError
from .protocols import ParsedResponse, Record

logger = logging.getLogger("RouterosCLI")

EXIT_OK = 0
EXIT_TRAP = 1
EXIT_CONFIG = 2
EXIT_CONNECT = 3
EXIT_PROTOCOL = 4


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s - %(name)s - [%(levelname)s] - %(message)s",
        datefmt="%H:%M:%S",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="routeros-core",
        description="向 RouterOS 设备发送一条 API 命令并打印结果",
    )
    parser.add_argument("--config", type=Path, help="TOML 配置文件路径")
    parser.add_argument("--profile", default="default", help="TOML 中的 profile 名称")
    parser.add_argument("--env-file", type=Path, help="在读取环境变量前加载的 .env 文件")
    parser.add_argument("--debug", action="store_true", help="记录每个收发的词")
    parser.add_argument("command", nargs="+", help="命令及参数，如 /ip/address/print")
    return parser


def load_cli_config(args: argparse.Namespace) -> RouterosConfig:
    """
    为 CLI 工具加载配置。
    指定 --config 时读取 TOML，否则读取环境变量。
    """
    if args.config is not None:
        config = load_config_from_toml(args.config, args.profile)
    else:
        config = load_config_from_env(args.env_file)

    if args.debug:
        config = replace(config, debug=True)
    return config


def _format_record(record: Record) -> str:
    return "\n".join(f"{key}={value}" for key, value in record.items())


def print_response(result: ParsedResponse) -> None:
    """打印 reply 记录到 stdout，trap/fatal 记录到 stderr。"""
    if result.replies:
        print("\n\n".join(_format_record(r) for r in result.replies))

    for tag, records in (("!trap", result.traps), ("!fatal", result.fatals)):
        for record in records:
            print(f"{tag}\n{_format_record(record)}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    """
    程序主入口点。返回进程退出码。
    """
    args = _build_parser().parse_args(argv)
    _setup_logging(args.debug)

    try:
        config = load_cli_config(args)
        with open_connection(config) as api:
            result = api.execmd(" ".join(args.command))
    except ConfigError as ce:
        logger.critical(f"配置错误: {ce}")
        return EXIT_CONFIG
    except NetworkError as ne:
        logger.critical(f"连接失败: {ne}")
        return EXIT_CONNECT
    except RouterosError as pe:
        logger.critical(f"协议错误: {pe}")
        return EXIT_PROTOCOL

    print_response(result)
    return EXIT_TRAP if result.has_errors else EXIT_OK


# 程序入口
if __name__ == "__main__":
    sys.exit(main())
