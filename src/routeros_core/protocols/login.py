# src/routeros_core/protocols/login.py
"""
RouterOS API 协议层 - 登录握手

支持两种模式:
1. 明文凭据模式 (v6.43+): /login 携带 name 与 password，服务器直接回复 `!done`。
2. 旧版 challenge-response 模式: 服务器回复 `!done` + `=ret=<32位hex>`，
   客户端需计算 "00" + md5(0x00 + password + challenge) 并再次发送 /login。
"""

import hashlib
import logging
import re
from enum import Enum, auto

from .constants import ATTRIBUTE_PREFIX, LoginConst, Tag, WORD_ENCODING

logger = logging.getLogger(__name__)

_CHALLENGE_RE = re.compile(LoginConst.CHALLENGE_PATTERN)


class LoginReply(Enum):
    """第一轮 /login 响应的判定结果。"""

    ACCEPTED = auto()
    """明文凭据被直接接受。"""

    CHALLENGE = auto()
    """服务器下发了旧版 challenge。"""

    REJECTED = auto()
    """登录失败 (凭据错误、协议不匹配或响应格式不符)。"""


def _attribute(key: str, value: str) -> str:
    return f"{ATTRIBUTE_PREFIX}{key}={value}"


def build_login_words(username: str, password: str) -> list[str]:
    """构建第一轮 /login 句子。"""
    return [
        LoginConst.COMMAND,
        _attribute(LoginConst.NAME_KEY, username),
        _attribute(LoginConst.PASSWORD_KEY, password),
    ]


def build_challenge_login_words(username: str, response: str) -> list[str]:
    """构建旧版模式的第二轮 /login 句子。"""
    return [
        LoginConst.COMMAND,
        _attribute(LoginConst.NAME_KEY, username),
        _attribute(LoginConst.RESPONSE_KEY, response),
    ]


def calculate_challenge_response(password: str, challenge: str) -> str:
    """计算旧版 challenge-response 的应答值。

    response = "00" + hex(md5(0x00 + password + unhex(challenge)))

    Args:
        password: 明文密码。
        challenge: 服务器下发的 32 位小写十六进制字符串。

    Returns:
        str: 34 个字符的应答值。
    """
    digest = hashlib.md5(
        LoginConst.MD5_PREFIX
        + password.encode(WORD_ENCODING)
        + bytes.fromhex(challenge)
    ).hexdigest()
    return LoginConst.RESPONSE_PREFIX + digest


def parse_login_reply(words: list[str]) -> tuple[LoginReply, str | None]:
    """解析第一轮 /login 的原始响应。

    Returns:
        tuple: (判定结果, challenge)。仅在 CHALLENGE 时 challenge 非空。
    """
    if not words or words[0] != Tag.DONE:
        logger.debug(f"登录响应首词不是 !done: {words[:1]}")
        return LoginReply.REJECTED, None

    # 句子结束符 (零长度词) 不算作后续词
    rest = [w for w in words[1:] if w]
    if not rest:
        return LoginReply.ACCEPTED, None

    match = _CHALLENGE_RE.search(rest[0])
    if match is None:
        logger.debug(f"登录响应中未找到 challenge: {rest[0]}")
        return LoginReply.REJECTED, None

    return LoginReply.CHALLENGE, match.group(1)


def is_login_done(words: list[str]) -> bool:
    """第二轮 /login 响应是否以 !done 开头。"""
    return bool(words) and words[0] == Tag.DONE
