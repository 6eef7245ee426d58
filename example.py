# example.py
"""
这是一个 RouterosApi 的最小示例。

它演示了如何将 routeros-core 作为一个库导入到你自己的项目中，
登录路由器、读取接口列表、添加一个地址，并在任何情况下断开连接。

运行此示例：
1. 在根目录创建 .env 文件，写入 ROUTEROS_HOST / ROUTEROS_USERNAME / ROUTEROS_PASSWORD。
2. 安装依赖： pip install -e .
3. 从项目根目录运行： python example.py
"""

import logging
import sys
from pathlib import Path

from routeros_core import (
    ConfigError,
    ConnectionStatus,
    NetworkError,
    load_config_from_env,
    open_connection,
)

# 日志配置开始
logging.basicConfig(
    level=logging.DEBUG, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("RouterosExample")
# 日志配置结束


def on_status_change(status: ConnectionStatus, msg: str) -> None:
    print(f">>> [Callback] 状态变更: {status.name} | 消息: {msg}")


def main() -> int:
    """
    程序主入口点。
    """
    logger.info("启动 RouterOS API 示例...")

    try:
        config = load_config_from_env(Path.cwd() / ".env")

        with open_connection(config, status_callback=on_status_change) as api:
            interfaces = api.execmd("/interface/print ?type=ether")
            for record in interfaces:
                logger.info(f"接口 {record.get('name')} running={record.get('running')}")

            result = api.comm(
                "/ip/address/add",
                {"address": "192.168.100.1/24", "interface": "ether2", "comment": "example"},
            )
            for trap in result.traps:
                logger.warning(f"添加地址失败: {trap.get('message')}")

    except ConfigError as ce:
        logger.error(f"配置错误: {ce}")
        return 2
    except NetworkError as ne:
        logger.error(f"连接失败: {ne}")
        return 3

    logger.info("RouterOS API 示例已结束。")
    return 0


# 程序入口
if __name__ == "__main__":
    sys.exit(main())
