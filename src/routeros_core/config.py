"""
RouterOS 核心库 - 配置模块

负责配置的加载、解析与强类型转换。
支持从 TOML 文件、环境变量 (可选 .env 文件) 或字典中加载配置。
"""

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .exceptions import ConfigError
from .protocols.constants import Port

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("true", "1", "t", "yes", "y", "on")
_FALSE_VALUES = ("false", "0", "f", "no", "n", "off", "")


@dataclass(frozen=True)
class RouterosConfig:
    """RouterosApi 的强类型配置对象。

    所有字段均为只读 (frozen=True)，确保配置在运行时不可变。
    默认值与经典 PHP API 类保持一致。

    Attributes:
        host: 路由器地址 (IP 或主机名)。可在 connect() 时覆盖。
        username: 登录用户名。
        password: 登录密码。
        port: API 端口，默认 8728。TLS 通常使用 8729，需要显式配置。
        use_ssl: 是否使用 TLS。TLS 模式下不校验证书 (接受自签名证书)。
        timeout: 连接与读写超时 (秒)。
        attempts: connect() 的最大尝试次数。
        delay: 两次尝试之间的等待时间 (秒)。
        debug: 是否在 DEBUG 级别记录每个收发的词。
    """

    host: str = ""
    username: str = ""
    password: str = ""
    port: int = Port.API
    use_ssl: bool = False
    timeout: float = 225
    attempts: int = 3
    delay: float = 2
    debug: bool = False

    def __post_init__(self) -> None:
        if not 0 < self.port < 65536:
            raise ConfigError(f"端口无效: {self.port}")
        if self.timeout <= 0:
            raise ConfigError(f"超时必须大于 0: {self.timeout}")
        if self.attempts < 1:
            raise ConfigError(f"尝试次数至少为 1: {self.attempts}")
        if self.delay < 0:
            raise ConfigError(f"重试间隔不能为负数: {self.delay}")

    def __repr__(self) -> str:
        """
        覆盖默认的 repr，隐藏密码字段，防止日志泄露敏感信息。
        """
        return (
            f"<{self.__class__.__name__} "
            f"host={self.host}:{self.port}, "
            f"username='{self.username}', "
            f"password='******', "
            f"ssl={self.use_ssl}, "
            f"timeout={self.timeout}, "
            f"attempts={self.attempts}, "
            f"delay={self.delay}>"
        )


def _to_bool(key: str, val: Any) -> bool:
    """将配置值转换为布尔值，支持环境变量中的字符串写法。"""
    if isinstance(val, bool):
        return val
    text = str(val).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigError(f"布尔值格式无效 '{key}': {val}")


def create_config_from_dict(raw_data: dict[str, Any]) -> RouterosConfig:
    """通用工厂：将字典转换为强类型配置对象。

    负责字段的清洗、默认值注入和类型转换。

    Args:
        raw_data: 原始配置字典 (来自 TOML 或 Env)。

    Returns:
        RouterosConfig: 验证并转换后的配置对象。

    Raises:
        ConfigError: 当字段格式错误或超出范围时抛出。
    """
    defaults = RouterosConfig()

    try:

        def _get(key: str, default: Any) -> Any:
            """获取可选字段，缺失则使用默认值"""
            return raw_data.get(key, default)

        return RouterosConfig(
            host=str(_get("host", defaults.host)),
            username=str(_get("username", defaults.username)),
            password=str(_get("password", defaults.password)),
            port=int(_get("port", defaults.port)),
            use_ssl=_to_bool("ssl", _get("ssl", defaults.use_ssl)),
            timeout=float(_get("timeout", defaults.timeout)),
            attempts=int(_get("attempts", defaults.attempts)),
            delay=float(_get("delay", defaults.delay)),
            debug=_to_bool("debug", _get("debug", defaults.debug)),
        )

    except Exception as e:
        if isinstance(e, ConfigError):
            raise
        raise ConfigError(f"配置生成失败: {e}") from e


def load_config_from_toml(file_path: Path, profile: str = "default") -> RouterosConfig:
    """从 TOML 文件加载配置。

    支持多层级查找策略:
    1. [profile.xxx]: 优先查找指定的 profile 块。
    2. [routeros]: 单设备配置块。
    3. Root: 兼容根目录直接配置。

    Args:
        file_path: TOML 文件路径。
        profile: 配置预设名。默认为 "default"。

    Returns:
        RouterosConfig: 配置对象。

    Raises:
        ConfigError: 文件读取失败或 Profile 不存在。
    """
    if not file_path.exists():
        raise ConfigError(f"配置文件未找到: {file_path}")

    try:
        with open(file_path, "rb") as f:
            data = tomllib.load(f)
    except Exception as e:
        raise ConfigError(f"读取 TOML 失败: {e}") from e

    raw_config = {}

    if "profile" in data:
        if profile not in data["profile"]:
            raise ConfigError(f"未找到预设: [profile.{profile}]")
        raw_config = data["profile"][profile]

    elif "routeros" in data:
        if profile != "default":
            logger.warning(f"配置仅包含 [routeros] 节，忽略 profile='{profile}'。")
        raw_config = data["routeros"]
    else:
        raw_config = data

    return create_config_from_dict(raw_config)


def load_config_from_env(env_file: Path | None = None) -> RouterosConfig:
    """从环境变量加载配置 (Docker/Cloud Friendly)。

    读取所有以 `ROUTEROS_` 开头的已知环境变量，并映射到配置字段。
    例如: `ROUTEROS_HOST` -> `host`。

    Args:
        env_file: 可选的 .env 文件。存在时先加载其内容 (覆盖已有变量)。

    Returns:
        RouterosConfig: 配置对象。

    Raises:
        ConfigError: 未检测到任何相关环境变量。
    """
    if env_file is not None:
        if env_file.exists():
            load_dotenv(dotenv_path=env_file, override=True)
            logger.debug(f"已加载配置文件: {env_file}")
        else:
            logger.warning(f"未找到 .env 文件: {env_file}")

    # 字段映射表 (Config Key -> Env Suffix)
    env_map = {
        "host": "HOST",
        "username": "USERNAME",
        "password": "PASSWORD",
        "port": "PORT",
        "ssl": "SSL",
        "timeout": "TIMEOUT",
        "attempts": "ATTEMPTS",
        "delay": "DELAY",
        "debug": "DEBUG",
    }

    raw_data = {}

    for cfg_key, env_suffix in env_map.items():
        val = os.environ.get(f"ROUTEROS_{env_suffix}")
        if val is not None:
            raw_data[cfg_key] = val

    if not raw_data:
        raise ConfigError("未检测到 ROUTEROS_ 前缀的环境变量")

    return create_config_from_dict(raw_data)
