"""
RouterOS API 协议层 (Protocol Layer)

本包负责协议词与句子的纯粹构建 (Build) 与解析 (Parse)。

- 不包含任何 socket 操作或网络 I/O。
- 不包含任何状态管理 (State)。
- 不依赖于 core 或 network 层。
"""

from . import constants
from .commands import build_comm_words, build_execmd_words
from .length import decode_length, encode_length
from .login import (
    LoginReply,
    build_challenge_login_words,
    build_login_words,
    calculate_challenge_response,
    is_login_done,
    parse_login_reply,
)
from .response import ParsedResponse, Record, parse_response
from .sentence import decode_words, encode_sentence, encode_word, read_word

# 公共 API
__all__ = [
    "constants",
    "encode_length",
    "decode_length",
    "encode_word",
    "encode_sentence",
    "read_word",
    "decode_words",
    "ParsedResponse",
    "Record",
    "parse_response",
    "LoginReply",
    "build_login_words",
    "build_challenge_login_words",
    "calculate_challenge_response",
    "parse_login_reply",
    "is_login_done",
    "build_execmd_words",
    "build_comm_words",
]
