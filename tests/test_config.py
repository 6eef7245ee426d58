# tests/test_config.py
from pathlib import Path

import pytest

from routeros_core import ConfigError
from routeros_core.config import (
    RouterosConfig,
    create_config_from_dict,
    load_config_from_env,
    load_config_from_toml,
)

ENV_KEYS = [
    "ROUTEROS_HOST",
    "ROUTEROS_USERNAME",
    "ROUTEROS_PASSWORD",
    "ROUTEROS_PORT",
    "ROUTEROS_SSL",
    "ROUTEROS_TIMEOUT",
    "ROUTEROS_ATTEMPTS",
    "ROUTEROS_DELAY",
    "ROUTEROS_DEBUG",
]


@pytest.fixture
def clean_env(monkeypatch):
    # setenv 先记录原值，load_dotenv 写入的变量在测试结束后同样会被还原
    for key in ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    return monkeypatch


def test_defaults():
    """默认值与经典 PHP API 类一致"""
    config = RouterosConfig()

    assert config.port == 8728
    assert config.use_ssl is False
    assert config.timeout == 225
    assert config.attempts == 3
    assert config.delay == 2
    assert config.debug is False


def test_repr_hides_password():
    config = RouterosConfig(host="10.0.0.1", username="admin", password="hunter2")
    assert "hunter2" not in repr(config)
    assert "******" in repr(config)


@pytest.mark.parametrize(
    "field, value, message",
    [
        ("port", 0, "端口"),
        ("port", 70000, "端口"),
        ("timeout", 0, "超时"),
        ("attempts", 0, "尝试次数"),
        ("delay", -1, "重试间隔"),
    ],
)
def test_validation(field, value, message):
    with pytest.raises(ConfigError, match=message):
        RouterosConfig(**{field: value})


def test_create_from_dict_coerces_strings():
    config = create_config_from_dict(
        {
            "host": "10.0.0.1",
            "username": "admin",
            "password": "pw",
            "port": "8729",
            "ssl": "yes",
            "timeout": "5.5",
            "attempts": "1",
            "delay": "0",
            "debug": "off",
        }
    )

    assert config.port == 8729
    assert config.use_ssl is True
    assert config.timeout == 5.5
    assert config.attempts == 1
    assert config.delay == 0
    assert config.debug is False


def test_create_from_dict_invalid_number():
    with pytest.raises(ConfigError, match="配置生成失败"):
        create_config_from_dict({"port": "abc"})


def test_create_from_dict_invalid_bool():
    with pytest.raises(ConfigError, match="布尔值"):
        create_config_from_dict({"ssl": "maybe"})


# --- Loader 测试 (I/O) ---


def test_load_toml_section(tmp_path):
    f = tmp_path / "config.toml"
    f.write_text(
        """
        [routeros]
        host = "192.168.88.1"
        username = "admin"
        password = "pw"
        ssl = true
        port = 8729
        """,
        encoding="utf-8",
    )

    config = load_config_from_toml(f)
    assert config.host == "192.168.88.1"
    assert config.use_ssl is True
    assert config.port == 8729


def test_load_toml_profile(tmp_path):
    f = tmp_path / "config.toml"
    f.write_text(
        """
        [profile.default]
        host = "10.0.0.1"

        [profile.branch]
        host = "10.0.1.1"
        attempts = 5
        """,
        encoding="utf-8",
    )

    assert load_config_from_toml(f).host == "10.0.0.1"
    branch = load_config_from_toml(f, profile="branch")
    assert branch.host == "10.0.1.1"
    assert branch.attempts == 5

    with pytest.raises(ConfigError, match="未找到预设"):
        load_config_from_toml(f, profile="missing")


def test_load_toml_root(tmp_path):
    f = tmp_path / "config.toml"
    f.write_text('host = "10.0.0.9"\n', encoding="utf-8")
    assert load_config_from_toml(f).host == "10.0.0.9"


def test_load_toml_not_found():
    with pytest.raises(ConfigError, match="配置文件未找到"):
        load_config_from_toml(Path("non_existent.toml"))


def test_load_toml_invalid(tmp_path):
    f = tmp_path / "config.toml"
    f.write_text("host = ", encoding="utf-8")
    with pytest.raises(ConfigError, match="读取 TOML 失败"):
        load_config_from_toml(f)


def test_load_env(clean_env):
    clean_env.setenv("ROUTEROS_HOST", "10.0.0.1")
    clean_env.setenv("ROUTEROS_USERNAME", "admin")
    clean_env.setenv("ROUTEROS_SSL", "1")
    clean_env.setenv("ROUTEROS_ATTEMPTS", "2")

    config = load_config_from_env()

    assert config.host == "10.0.0.1"
    assert config.username == "admin"
    assert config.use_ssl is True
    assert config.attempts == 2


def test_load_env_file(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "ROUTEROS_HOST=172.16.0.1\nROUTEROS_PASSWORD=from-file\n", encoding="utf-8"
    )

    config = load_config_from_env(env_file)

    assert config.host == "172.16.0.1"
    assert config.password == "from-file"


def test_load_env_missing(clean_env):
    with pytest.raises(ConfigError, match="ROUTEROS_"):
        load_config_from_env()
