"""
RouterOS 核心库 - 状态模块

负责定义和存储连接会话的易变状态。
本模块不包含业务逻辑，仅作为数据容器供 Core 读写。
"""

from dataclasses import dataclass
from enum import Enum, auto


class ConnectionStatus(Enum):
    """连接管理器的生命周期状态枚举。

    状态流转示意:
    DISCONNECTED -> CONNECTING -> AUTHENTICATING -> CONNECTED
         ^              |               |               |
         +--------------+---------------+---------------+
                    (失败 / 主动断开)
    """

    DISCONNECTED = auto()
    """未连接。初始状态，或者连接失败、主动断开后的状态。"""

    CONNECTING = auto()
    """正在建立 TCP/TLS 连接。"""

    AUTHENTICATING = auto()
    """连接已建立，正在执行 /login 握手。"""

    CONNECTED = auto()
    """登录成功，可以发送命令。"""


@dataclass
class RouterosState:
    """存储 RouterOS API 连接会话的易变状态数据。

    Attributes:
        status: 当前连接状态。
        host: 最近一次 connect() 的目标主机。
        last_error: 最近一次发生的错误信息描述。
        attempts_made: 最近一次 connect() 实际执行的尝试次数。
    """

    status: ConnectionStatus = ConnectionStatus.DISCONNECTED
    host: str = ""
    last_error: str = ""
    attempts_made: int = 0

    @property
    def is_connected(self) -> bool:
        """判断当前是否处于已认证的连接状态。"""
        return self.status == ConnectionStatus.CONNECTED
