"""
RouterOS 核心库 - 网络模块 (Network)

封装 TCP / TLS Socket 的建立、发送、精确读取和关闭逻辑。
该模块屏蔽了底层 Socket 的复杂性，向 Core 提供纯粹的 bytes 收发接口。
所有操作均为同步阻塞，超时由连接时设置的 socket timeout 控制。
"""

import logging
import socket
import ssl
from typing import Optional

from .config import RouterosConfig
from .exceptions import ConnectionClosedError, NetworkError, ReadTimeoutError

logger = logging.getLogger(__name__)


def _create_ssl_context() -> ssl.SSLContext:
    """创建宽松信任的 TLS 上下文。

    面向局域网设备管理: 不校验对端证书与主机名，接受自签名证书。
    """
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


class NetworkClient:
    """
    封装阻塞式 TCP/TLS 操作的客户端。

    Socket 由本对象独占，任何读写前都会检查连接是否存活。
    """

    def __init__(self, config: RouterosConfig):
        self.config = config
        self.sock: Optional[socket.socket] = None

    @property
    def is_open(self) -> bool:
        return self.sock is not None

    def open(self, host: str) -> None:
        """
        建立到 host:port 的 TCP 连接，按配置包装 TLS，并设置读写超时。
        """
        self.close()
        target = (host, self.config.port)

        try:
            sock = socket.create_connection(target, timeout=self.config.timeout)
        except (OSError, ValueError) as e:
            # ValueError: 主机名无法做 IDNA 编码 (如标签过长)
            raise NetworkError(f"连接失败 {target}: {e}") from e

        try:
            if self.config.use_ssl:
                sock = _create_ssl_context().wrap_socket(sock, server_hostname=host)
            sock.settimeout(self.config.timeout)
        except OSError as e:
            sock.close()
            raise NetworkError(f"TLS 握手失败 {target}: {e}") from e

        self.sock = sock
        logger.debug(f"Socket 已连接: {target} (ssl={self.config.use_ssl})")

    def send(self, data: bytes) -> None:
        """
        发送全部数据。
        """
        if self.sock is None:
            raise NetworkError("Socket 未连接")

        try:
            self.sock.sendall(data)
        except OSError as e:
            raise NetworkError(f"发送失败: {e}") from e

    def recv_exact(self, size: int) -> bytes:
        """
        读取恰好 size 字节。

        短读不代表结束，会循环累积直到凑满；只有连接关闭或出错才会中断。

        Raises:
            ReadTimeoutError: 读取超时。
            ConnectionClosedError: 对端关闭连接。
            NetworkError: 其他 I/O 错误。
        """
        if self.sock is None:
            raise NetworkError("Socket 未连接")

        chunks = []
        remaining = size
        while remaining > 0:
            try:
                chunk = self.sock.recv(remaining)
            except socket.timeout:
                raise ReadTimeoutError(f"接收超时 ({self.config.timeout}s)") from None
            except OSError as e:
                raise NetworkError(f"接收错误: {e}") from e

            if not chunk:
                raise ConnectionClosedError("连接已被对端关闭")

            chunks.append(chunk)
            remaining -= len(chunk)

        return b"".join(chunks)

    def close(self) -> None:
        """关闭 Socket (可重复调用)"""
        if self.sock is not None:
            try:
                self.sock.close()
            except OSError as e:
                logger.debug(f"关闭 Socket 时出错: {e}")
            finally:
                self.sock = None
            logger.debug("Socket 已关闭")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
