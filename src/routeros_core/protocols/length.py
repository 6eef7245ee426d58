# src/routeros_core/protocols/length.py
"""
RouterOS API 协议层 - 长度前缀编解码

每个词 (Word) 之前都有一个 1~5 字节的变长长度前缀:

| 范围           | 编码                                       |
|----------------|--------------------------------------------|
| n < 0x80       | 1 字节: n                                  |
| n < 0x4000     | 2 字节: 首字节 = (n >> 8) | 0x80           |
| n < 0x200000   | 3 字节: 首字节 = (n >> 16) | 0xC0          |
| n < 0x10000000 | 4 字节: 首字节 = (n >> 24) | 0xE0          |
| 其他           | 5 字节: 0xF0 + 32 位大端整数               |

encode_length 与 decode_length 在 0 ~ 0xFFFFFFFF 上互为逆运算。
"""

import struct
from collections.abc import Callable

from ..exceptions import FramingError
from .constants import LengthConst

# read(n) 必须返回恰好 n 字节，否则视为前缀被截断
ReadFunc = Callable[[int], bytes]


def encode_length(n: int) -> bytes:
    """将词长度编码为最短的变长前缀。

    Args:
        n: 词的字节长度。

    Returns:
        bytes: 1~5 字节的长度前缀。

    Raises:
        FramingError: n 为负数或超出 32 位无符号整数范围。
    """
    if n < 0 or n > LengthConst.MAX_VALUE:
        raise FramingError(f"长度超出可编码范围: {n}")

    if n < LengthConst.LIMIT_1:
        return bytes([n])
    if n < LengthConst.LIMIT_2:
        return struct.pack(">H", n | (LengthConst.FLAG_2 << 8))
    if n < LengthConst.LIMIT_3:
        return struct.pack(">I", n | (LengthConst.FLAG_3 << 16))[1:]
    if n < LengthConst.LIMIT_4:
        return struct.pack(">I", n | (LengthConst.FLAG_4 << 24))
    return bytes([LengthConst.FLAG_5]) + struct.pack(">I", n)


def _read_exact(read: ReadFunc, size: int) -> bytes:
    data = read(size)
    if len(data) != size:
        raise FramingError(f"长度前缀被截断 (期望 {size} 字节, 实际 {len(data)} 字节)")
    return data


def decode_length(read: ReadFunc) -> int:
    """从流中读取并解码一个长度前缀。

    Args:
        read: 读取函数，read(n) 返回 n 字节。网络层的 recv_exact
            或 io.BytesIO(...).read 均可。

    Returns:
        int: 解码得到的词长度。

    Raises:
        FramingError: 首字节模式非法 (0xF1 ~ 0xFF) 或前缀被截断。
    """
    first = _read_exact(read, 1)[0]

    if first < LengthConst.FLAG_2:
        return first

    if first & LengthConst.MASK_2 == LengthConst.FLAG_2:
        (b1,) = _read_exact(read, 1)
        return ((first & LengthConst.DATA_MASK_2) << 8) | b1

    if first & LengthConst.MASK_3 == LengthConst.FLAG_3:
        b1, b2 = _read_exact(read, 2)
        return ((first & LengthConst.DATA_MASK_3) << 16) | (b1 << 8) | b2

    if first & LengthConst.MASK_4 == LengthConst.FLAG_4:
        b1, b2, b3 = _read_exact(read, 3)
        return ((first & LengthConst.DATA_MASK_4) << 24) | (b1 << 16) | (b2 << 8) | b3

    if first == LengthConst.FLAG_5:
        return struct.unpack(">I", _read_exact(read, 4))[0]

    raise FramingError(f"非法的长度前缀首字节: 0x{first:02x}")
