# src/routeros_core/protocols/response.py
"""
RouterOS API 协议层 - 响应解析

将读循环收集到的扁平词列表转换为结构化记录:

- `!re` 之后的属性词构成一条 Reply 记录，按出现顺序保存。
- `!trap` / `!fatal` 之后的属性词构成错误记录，分别存放在各自的列表中。

已知局限: Reply 与 Trap/Fatal 分开存放，同一次读取中二者的相对顺序不保留。
"""

import logging
from dataclasses import dataclass, field

from .constants import ATTRIBUTE_PREFIX, Tag

logger = logging.getLogger(__name__)

Record = dict[str, str]


@dataclass
class ParsedResponse:
    """一次 read() 的结构化结果。

    Attributes:
        replies: 按顺序排列的 `!re` 记录。
        traps: `!trap` 记录 (可恢复错误)。
        fatals: `!fatal` 记录 (致命错误)。
    """

    replies: list[Record] = field(default_factory=list)
    traps: list[Record] = field(default_factory=list)
    fatals: list[Record] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """是否包含 trap 或 fatal 记录。"""
        return bool(self.traps or self.fatals)

    def __len__(self) -> int:
        return len(self.replies)

    def __iter__(self):
        return iter(self.replies)


def parse_response(words: list[str]) -> ParsedResponse:
    """将扁平的词列表解析为 ParsedResponse。

    解析是宽松的: 在任何记录开始之前出现的属性词会被静默丢弃。
    `!done` 与零长度词不影响记录构建。

    Args:
        words: read(parse=False) 返回的原始词列表。

    Returns:
        ParsedResponse: 结构化结果。
    """
    parsed = ParsedResponse()
    current: Record | None = None

    for word in words:
        if word == Tag.REPLY:
            current = {}
            parsed.replies.append(current)
        elif word == Tag.TRAP:
            current = {}
            parsed.traps.append(current)
        elif word == Tag.FATAL:
            current = {}
            parsed.fatals.append(current)
        elif word.startswith(ATTRIBUTE_PREFIX):
            if current is None:
                logger.debug(f"丢弃无归属的属性词: {word}")
                continue
            key, _, value = word[1:].partition("=")
            current[key] = value

    return parsed
