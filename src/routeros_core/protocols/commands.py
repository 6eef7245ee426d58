# src/routeros_core/protocols/commands.py
"""
RouterOS API 协议层 - 命令词构建

两种构建方式，返回的词列表中最后一个词即句子的结束词:

- build_execmd_words: 自由格式命令行 "/ip/address/print ?interface=ether1"。
- build_comm_words: 命令 + 参数字典。

`?` / `~` 开头的查询词原样发送，其他参数加上 `=` 前缀。
"""

from collections.abc import Mapping

from .constants import ATTRIBUTE_PREFIX, QUERY_PREFIXES


def _prefix_for(token: str) -> str:
    return "" if token[:1] in QUERY_PREFIXES else ATTRIBUTE_PREFIX


def build_execmd_words(command_line: str) -> list[str]:
    """将自由格式命令行拆分为词列表。

    以空格切分，首个 token 作为命令路径原样发送，其余 token 视为参数。
    连续空格产生的空 token 被忽略；参数值中不能包含空格 (请使用 comm)。

    Args:
        command_line: 如 "/interface/set .id=ether1 disabled=yes"。

    Returns:
        list[str]: 词列表，空命令返回空列表。
    """
    tokens = command_line.split()
    if not tokens:
        return []

    command, *args = tokens
    return [command] + [_prefix_for(arg) + arg for arg in args]


def build_comm_words(
    command: str, params: Mapping[str, str] | None = None
) -> list[str]:
    """由命令与参数字典构建词列表。

    参数按字典的插入顺序发送，每个参数编码为 `prefix + key + "=" + value`。

    Args:
        command: 命令路径，如 "/ip/address/add"。
        params: 参数字典，如 {"address": "192.168.1.1/24"}。

    Returns:
        list[str]: 词列表。
    """
    words = [command]
    for key, value in (params or {}).items():
        words.append(f"{_prefix_for(key)}{key}={value}")
    return words
