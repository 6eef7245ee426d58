"""
RouterOS 核心库 - 异常体系 (Exceptions)

定义库内统一使用的异常类，以便上层应用（如 CLI/脚本）能进行精细的错误处理。

注意: connect() 的失败不会以异常形式抛出，而是通过返回值与状态反馈。
这里的异常主要用于配置校验、网络 I/O 封装以及协议帧错误。
"""


class RouterosError(Exception):
    """RouterOS 核心库所有内部异常的基类。

    上层应用可以通过捕获此异常来处理所有由 routeros-core 抛出的已知错误。
    """

    pass


class ConfigError(RouterosError):
    """配置加载或校验失败。

    触发场景:
    1. 端口、超时、重试次数等字段超出合法范围。
    2. 字段类型无法转换 (如 port = "abc")。
    3. 找不到配置文件或环境变量。
    4. connect() 时既未传入也未配置 host / username。
    """

    pass


class NetworkError(RouterosError):
    """网络层面的错误 (I/O 级别)。

    触发场景:
    1. TCP 连接建立失败或 TLS 握手失败。
    2. 发送 (send) 失败。
    3. 读取过程中连接异常。

    注意: 此类错误通常是暂时的，上层逻辑应尝试重试 (Retry)。
    """

    pass


class ConnectionClosedError(NetworkError):
    """对端已关闭连接 (recv 返回空数据)。"""

    pass


class ReadTimeoutError(NetworkError):
    """读取超时。

    读循环遇到此错误时会停止累积并返回已读到的部分结果，socket 保持打开。
    """

    pass


class ProtocolError(RouterosError):
    """协议交互错误 (逻辑级别)。"""

    pass


class FramingError(ProtocolError):
    """长度前缀帧错误。

    触发场景:
    1. 长度前缀的首字节不属于任何合法编码 (如 0xF1 ~ 0xFF)。
    2. 长度前缀在读取途中被截断。
    3. 待编码的长度为负数或超出 32 位无符号整数范围。

    该错误对当前 read() 是致命的，不会重试。
    """

    pass

