# tests/conftest.py
import socket
import sys
from pathlib import Path

import pytest

# 确保 src 目录在 sys.path 中
src_path = Path(__file__).resolve().parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from routeros_core.config import RouterosConfig
from routeros_core.protocols import decode_words, encode_sentence


class FakeSocket:
    """
    模拟路由器一侧的 socket。

    - inbound: 预置的服务器响应字节，recv 依次读取。
    - chunk_size: 每次 recv 最多返回的字节数，用于模拟短读。
    - on_empty: 数据读完后的行为，"timeout" 抛出 socket.timeout，"close" 返回 b""。
    """

    def __init__(
        self, inbound: bytes = b"", chunk_size: int | None = None, on_empty="timeout"
    ):
        self.inbound = bytearray(inbound)
        self.outbound = bytearray()
        self.chunk_size = chunk_size
        self.on_empty = on_empty
        self.closed = False
        self.timeout = None

    def settimeout(self, value):
        self.timeout = value

    def sendall(self, data: bytes):
        self.outbound.extend(data)

    def recv(self, n: int) -> bytes:
        if not self.inbound:
            if self.on_empty == "timeout":
                raise socket.timeout("timed out")
            return b""
        size = min(n, self.chunk_size or n)
        data = bytes(self.inbound[:size])
        del self.inbound[:size]
        return data

    def close(self):
        self.closed = True

    def sent_sentences(self) -> list[list[str]]:
        """将客户端发出的字节拆分为句子 (不含结束词)。"""
        sentences, current = [], []
        for word in decode_words(bytes(self.outbound)):
            if word:
                current.append(word)
            else:
                sentences.append(current)
                current = []
        return sentences


def _router_reply(*sentences: list[str]) -> bytes:
    """[辅助函数] 将多个句子编码为服务器响应字节流"""
    return b"".join(encode_sentence(s) for s in sentences)


@pytest.fixture
def valid_config():
    """
    [Fixture] 返回一个测试用的 RouterosConfig 对象。
    """
    return RouterosConfig(
        host="192.168.88.1",
        username="admin",
        password="secret",
        port=8728,
        use_ssl=False,
        timeout=3,
        attempts=3,
        delay=1,
        debug=True,
    )


@pytest.fixture
def router_reply():
    """[Fixture] 返回句子编码函数"""
    return _router_reply


@pytest.fixture
def fake_socket():
    """[Fixture] 返回 FakeSocket 工厂"""
    return FakeSocket
