# src/routeros_core/protocols/constants.py
"""
RouterOS API 协议层 - 常量定义

本模块定义了所有协议相关的魔法数字、标签词和固定值。
采用命名空间 (Class Namespace) 组织。
"""

# =========================================================================
# 1. 传输层 (Transport)
# =========================================================================


class Port:
    """API 服务的约定端口。TLS 端口仅作参考，是否使用由调用方配置。"""

    API = 8728
    API_SSL = 8729


# 词内容在线路上的字符编码
WORD_ENCODING = "utf-8"


# =========================================================================
# 2. 长度前缀 (Length Prefix)
# =========================================================================


class LengthConst:
    """变长长度前缀的阈值与掩码。"""

    # 编码阈值: n < LIMIT_x 时使用 x 字节形式
    LIMIT_1 = 0x80
    LIMIT_2 = 0x4000
    LIMIT_3 = 0x200000
    LIMIT_4 = 0x10000000
    MAX_VALUE = 0xFFFFFFFF

    # 首字节标志位
    FLAG_2 = 0x80
    FLAG_3 = 0xC0
    FLAG_4 = 0xE0
    FLAG_5 = 0xF0

    # 首字节判定掩码与对应的数据掩码
    MASK_2 = 0xC0
    MASK_3 = 0xE0
    MASK_4 = 0xF0

    DATA_MASK_2 = 0x3F
    DATA_MASK_3 = 0x1F
    DATA_MASK_4 = 0x0F


# =========================================================================
# 3. 标签词 (Tag Words)
# =========================================================================


class Tag:
    """响应句子的首词。"""

    REPLY = "!re"
    TRAP = "!trap"
    FATAL = "!fatal"
    DONE = "!done"


# 属性词 / 查询词前缀
ATTRIBUTE_PREFIX = "="
QUERY_PREFIXES = ("?", "~")


# =========================================================================
# 4. 登录 (Login)
# =========================================================================


class LoginConst:
    COMMAND = "/login"
    NAME_KEY = "name"
    PASSWORD_KEY = "password"
    RESPONSE_KEY = "response"

    # 旧版 challenge-response 模式
    CHALLENGE_PATTERN = r"ret=([0-9a-f]{32})"
    RESPONSE_PREFIX = "00"
    MD5_PREFIX = b"\x00"
