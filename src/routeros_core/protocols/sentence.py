# src/routeros_core/protocols/sentence.py
"""
RouterOS API 协议层 - 词与句子的编解码

一个词 (Word) = 长度前缀 + 原始字节；
一个句子 (Sentence) = 若干个词 + 一个零长度词 (单个 0x00 字节)。

本模块只处理字节，不涉及 socket。
"""

import io

from ..exceptions import FramingError
from .constants import WORD_ENCODING
from .length import ReadFunc, decode_length, encode_length

SENTENCE_TERMINATOR = b"\x00"


def encode_word(word: str) -> bytes:
    """编码单个词 (去除首尾空白后加上长度前缀)。"""
    raw = word.strip().encode(WORD_ENCODING)
    return encode_length(len(raw)) + raw


def encode_sentence(words: list[str]) -> bytes:
    """编码一个完整句子，末尾追加零长度词。"""
    return b"".join(encode_word(w) for w in words) + SENTENCE_TERMINATOR


def read_word(read: ReadFunc) -> str:
    """从流中读取一个完整的词。

    零长度词 (句子结束符) 返回空字符串。

    Args:
        read: 读取函数，read(n) 返回恰好 n 字节 (部分读取由调用方负责累积)。

    Raises:
        FramingError: 长度前缀非法或词内容被截断。
    """
    length = decode_length(read)
    if length == 0:
        return ""

    raw = read(length)
    if len(raw) != length:
        raise FramingError(f"词内容被截断 (期望 {length} 字节, 实际 {len(raw)} 字节)")
    return raw.decode(WORD_ENCODING, errors="replace")


def decode_words(data: bytes) -> list[str]:
    """将一段完整的字节流拆解为词列表 (包含零长度结束词)。

    主要用于离线分析抓包数据或测试。
    """
    stream = io.BytesIO(data)
    words = []
    while stream.tell() < len(data):
        words.append(read_word(stream.read))
    return words
