# src/routeros_core/__init__.py
"""
RouterOS-Core v1.0.0
RouterOS API (8728/8729) 协议的同步客户端核心库。
"""

# 暴露核心配置
from .config import (
    RouterosConfig,
    create_config_from_dict,
    load_config_from_env,
    load_config_from_toml,
)

# 暴露客户端与状态
from .core import RouterosApi, open_connection

# 暴露异常体系 (方便上层 try-except)
from .exceptions import (
    ConfigError,
    ConnectionClosedError,
    FramingError,
    NetworkError,
    ProtocolError,
    ReadTimeoutError,
    RouterosError,
)
from .protocols import ParsedResponse, decode_length, encode_length, parse_response
from .state import ConnectionStatus, RouterosState

__version__ = "1.0.0"

__all__ = [
    "RouterosApi",
    "open_connection",
    "RouterosConfig",
    "RouterosState",
    "ConnectionStatus",
    "ParsedResponse",
    "parse_response",
    "encode_length",
    "decode_length",
    "create_config_from_dict",
    "load_config_from_env",
    "load_config_from_toml",
    "RouterosError",
    "ConfigError",
    "NetworkError",
    "ConnectionClosedError",
    "ReadTimeoutError",
    "ProtocolError",
    "FramingError",
]
