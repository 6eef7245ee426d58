# File: src/routeros_core/core.py
"""
RouterOS API 核心引擎 (Core Engine)

职责：
1. 资源组装：State + Network + Config。
2. 连接管理：connect-with-retry、/login 握手、disconnect。
3. 词 I/O：write 写出单个词，read 循环读取一次逻辑响应。
4. 命令入口：execmd (自由格式) 与 comm (命令 + 参数字典)。
"""

import logging
import time
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import replace
from typing import Any

from .config import RouterosConfig
from .exceptions import (
    ConfigError,
    ConnectionClosedError,
    FramingError,
    NetworkError,
    ReadTimeoutError,
    RouterosError,
)
from .network import NetworkClient
from .protocols import (
    LoginReply,
    ParsedResponse,
    build_challenge_login_words,
    build_comm_words,
    build_execmd_words,
    build_login_words,
    calculate_challenge_response,
    encode_length,
    encode_word,
    is_login_done,
    parse_login_reply,
    parse_response,
    read_word,
)
from .protocols.constants import LoginConst, Tag
from .protocols.sentence import SENTENCE_TERMINATOR
from .state import ConnectionStatus, RouterosState

logger = logging.getLogger(__name__)

# 状态回调: (新状态, 描述信息)
StatusCallback = Callable[[ConnectionStatus, str], Any]
# 词观察者: (方向, 词)。方向为 SENT (<<<) 或 RECEIVED (>>>)
WordObserver = Callable[[str, str], Any]

SENT = "<<<"
RECEIVED = ">>>"

_PASSWORD_WORD = f"={LoginConst.PASSWORD_KEY}="


def _mask_word(word: str) -> str:
    """日志输出时隐藏密码值"""
    if word.startswith(_PASSWORD_WORD):
        return _PASSWORD_WORD + "******"
    return word


class RouterosApi:
    """RouterOS API 客户端 (同步阻塞)。

    一个实例对应一条连接，命令必须严格串行发送：
    在上一次 read() 读完完整响应之前发送下一条命令会破坏数据流。
    """

    def __init__(
        self,
        config: RouterosConfig | None = None,
        status_callback: StatusCallback | None = None,
        word_observer: WordObserver | None = None,
    ) -> None:
        """初始化客户端。

        Args:
            config: 全局配置对象。缺省时使用默认配置。
            status_callback: 状态变更回调，等价于 add_listener。
            word_observer: 收发词观察者，等价于 add_word_observer。
        """
        self.config = config or RouterosConfig()

        self._listeners: list[StatusCallback] = []
        self._word_observers: list[WordObserver] = []
        if status_callback:
            self.add_listener(status_callback)
        if word_observer:
            self.add_word_observer(word_observer)

        self._state = RouterosState()
        self.net_client = NetworkClient(self.config)

    @property
    def state(self) -> RouterosState:
        """获取当前会话状态的只读副本。"""
        return replace(self._state)

    @property
    def connected(self) -> bool:
        """是否已完成登录。"""
        return self._state.is_connected

    @staticmethod
    def encode_length(n: int) -> bytes:
        """编码词长度前缀。"""
        return encode_length(n)

    # ------------------------------------------------------------------
    # 监听器
    # ------------------------------------------------------------------

    def add_listener(self, callback: StatusCallback) -> None:
        """注册状态变更监听器。"""
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback: StatusCallback) -> None:
        """移除状态变更监听器。"""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def add_word_observer(self, observer: WordObserver) -> None:
        """注册收发词观察者。观察者收到的是未脱敏的原始词。"""
        if observer not in self._word_observers:
            self._word_observers.append(observer)

    def remove_word_observer(self, observer: WordObserver) -> None:
        """移除收发词观察者。"""
        if observer in self._word_observers:
            self._word_observers.remove(observer)

    # ------------------------------------------------------------------
    # 连接管理
    # ------------------------------------------------------------------

    def connect(
        self,
        host: str | None = None,
        login: str | None = None,
        password: str | None = None,
    ) -> bool:
        """连接并登录。

        最多尝试 config.attempts 次，每次失败 (连接失败或登录失败) 后关闭 socket，
        若仍有剩余次数则等待 config.delay 秒再重试。

        Args:
            host: 路由器地址，缺省使用 config.host。
            login: 用户名，缺省使用 config.username。
            password: 密码，缺省使用 config.password。

        Returns:
            bool: 登录成功返回 True；所有尝试均失败返回 False (不抛异常)。

        Raises:
            ConfigError: 既未传入也未配置 host 或用户名。
        """
        host = host if host is not None else self.config.host
        login = login if login is not None else self.config.username
        password = password if password is not None else self.config.password

        if not host:
            raise ConfigError("未指定路由器地址 (host)")
        if not login:
            raise ConfigError("未指定登录用户名 (username)")

        self.disconnect()
        self._state.host = host
        self._state.last_error = ""
        self._state.attempts_made = 0

        attempts = self.config.attempts
        for attempt in range(1, attempts + 1):
            self._state.attempts_made = attempt
            self._update_status(
                ConnectionStatus.CONNECTING,
                f"正在连接 {host}:{self.config.port} ({attempt}/{attempts})",
            )

            try:
                self.net_client.open(host)
                self._update_status(ConnectionStatus.AUTHENTICATING, "正在登录...")

                if self._login_process(login, password):
                    self._update_status(ConnectionStatus.CONNECTED, f"已连接到 {host}")
                    return True

                self._state.last_error = "登录失败"
                logger.warning(f"登录 {host} 失败 ({attempt}/{attempts})")

            except RouterosError as e:
                self._state.last_error = str(e)
                logger.warning(f"连接 {host} 失败 ({attempt}/{attempts}): {e}")

            self.net_client.close()
            self._update_status(ConnectionStatus.DISCONNECTED, "本次尝试失败")

            if attempt < attempts:
                time.sleep(self.config.delay)

        logger.error(f"无法连接到 {host}，已尝试 {attempts} 次")
        return False

    def _login_process(self, login: str, password: str) -> bool:
        """执行 /login 握手。

        兼容明文凭据模式 (v6.43+) 与旧版 challenge-response 模式。
        任何格式不符的响应都视为失败而非异常。
        """
        if not self._send_sentence(build_login_words(login, password)):
            return False
        reply, challenge = parse_login_reply(self.read(parse=False))

        if reply is LoginReply.ACCEPTED:
            logger.debug("明文凭据登录成功")
            return True

        if reply is LoginReply.CHALLENGE and challenge is not None:
            logger.debug("服务器要求旧版 challenge-response 登录")
            response = calculate_challenge_response(password, challenge)
            if not self._send_sentence(build_challenge_login_words(login, response)):
                return False
            return is_login_done(self.read(parse=False))

        return False

    def disconnect(self) -> None:
        """关闭连接 (可重复调用)。"""
        self.net_client.close()
        if self._state.status != ConnectionStatus.DISCONNECTED:
            self._update_status(ConnectionStatus.DISCONNECTED, "连接已断开")

    # ------------------------------------------------------------------
    # 词 I/O
    # ------------------------------------------------------------------

    def write(self, word: str, terminal: bool = True) -> bool:
        """写出一个词。

        Args:
            word: 词内容，首尾空白会被去除。
            terminal: 是否在其后追加零长度词以结束句子。

        Returns:
            bool: 没有存活的 socket 或发送失败时返回 False。
        """
        if not self.net_client.is_open:
            return False

        data = encode_word(word)
        if terminal:
            data += SENTENCE_TERMINATOR

        try:
            self.net_client.send(data)
        except NetworkError as e:
            self._state.last_error = str(e)
            logger.error(f"写入失败: {e}")
            self.disconnect()
            return False

        self._notify_word(SENT, word.strip())
        return True

    def read(self, parse: bool = True) -> list[str] | ParsedResponse:
        """读取一次逻辑响应。

        持续读取词，直到包含 `!done` 的句子读完 (收到其零长度结束词)、
        读取超时或连接关闭。一次响应可能跨越多个句子 (多个 `!re` 后跟一个 `!done`)，
        所有词被收集到一个扁平列表中。

        在词边界上超时会返回已读取的部分结果，socket 保持打开；
        词读到一半时超时、连接关闭、I/O 错误或帧错误都会断开连接。

        Args:
            parse: True 时返回 ParsedResponse，否则返回原始词列表。

        Raises:
            FramingError: 长度前缀非法，对当前读取是致命的 (抛出前已断开连接)。
        """
        words: list[str] = []
        done = False
        consumed = 0

        def recv(size: int) -> bytes:
            nonlocal consumed
            data = self.net_client.recv_exact(size)
            consumed += len(data)
            return data

        while self.net_client.is_open:
            consumed = 0
            try:
                word = read_word(recv)
            except ReadTimeoutError as e:
                if consumed:
                    # 词读到一半超时，后续字节已无法对齐
                    self._state.last_error = str(e)
                    logger.error(f"词读取中途超时，断开连接: {e}")
                    self.disconnect()
                    break
                logger.warning(f"读取超时，返回部分结果 ({len(words)} 个词): {e}")
                break
            except FramingError as e:
                self._state.last_error = str(e)
                logger.error(f"帧错误，断开连接: {e}")
                self.disconnect()
                raise
            except ConnectionClosedError as e:
                self._state.last_error = str(e)
                logger.warning(f"读取中连接关闭: {e}")
                self.disconnect()
                break
            except NetworkError as e:
                self._state.last_error = str(e)
                logger.error(f"读取错误: {e}")
                self.disconnect()
                break

            words.append(word)
            self._notify_word(RECEIVED, word)

            if word == Tag.DONE:
                done = True
            elif done and not word:
                break

        return parse_response(words) if parse else words

    def _send_sentence(self, words: list[str]) -> bool:
        """写出一个句子，最后一个词作为结束词。"""
        last = len(words) - 1
        for i, word in enumerate(words):
            if not self.write(word, terminal=(i == last)):
                return False
        return True

    # ------------------------------------------------------------------
    # 命令入口
    # ------------------------------------------------------------------

    def execmd(self, command_line: str) -> ParsedResponse:
        """执行自由格式命令，如 "/ip/address/print ?interface=ether1"。

        空命令不发送任何数据，直接返回空结果。
        """
        words = build_execmd_words(command_line)
        if not words:
            return ParsedResponse()

        self._send_sentence(words)
        return self.read(parse=True)

    def comm(
        self, command: str, params: Mapping[str, str] | None = None
    ) -> ParsedResponse:
        """执行命令 + 参数字典，如 comm("/ip/address/add", {"address": "10.0.0.1/24"})。"""
        self._send_sentence(build_comm_words(command, params))
        return self.read(parse=True)

    # ------------------------------------------------------------------
    # 内部
    # ------------------------------------------------------------------

    def _notify_word(self, direction: str, word: str) -> None:
        """调用日志与所有词观察者。"""
        if self.config.debug:
            logger.debug(f"{direction} {_mask_word(word)}")

        for observer in self._word_observers:
            try:
                observer(direction, word)
            except Exception as e:
                logger.error(f"词观察者执行异常: {e}")

    def _update_status(self, status: ConnectionStatus, msg: str) -> None:
        """更新内部状态并触发所有回调。"""
        self._state.status = status
        logger.info(f"[{status.name}] {msg}")

        for callback in self._listeners:
            try:
                callback(status, msg)
            except Exception as e:
                logger.error(f"回调执行异常: {e}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()


@contextmanager
def open_connection(
    config: RouterosConfig,
    status_callback: StatusCallback | None = None,
    word_observer: WordObserver | None = None,
) -> Iterator[RouterosApi]:
    """以配置中的凭据建立连接，并保证在任何退出路径上断开。

    用法::

        with open_connection(config) as api:
            result = api.execmd("/system/resource/print")

    Raises:
        NetworkError: 所有尝试均失败。
        ConfigError: 配置中缺少 host 或 username。
    """
    api = RouterosApi(config, status_callback, word_observer)
    try:
        if not api.connect():
            raise NetworkError(
                f"无法连接到 {config.host}: {api.state.last_error or '未知原因'}"
            )
        yield api
    finally:
        api.disconnect()
