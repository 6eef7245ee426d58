# tests/test_main.py
import argparse
from unittest.mock import patch

import pytest

from routeros_core import main as cli


@pytest.fixture
def config_file(tmp_path):
    f = tmp_path / "config.toml"
    f.write_text(
        """
        [routeros]
        host = "192.168.88.1"
        username = "admin"
        password = "secret"
        attempts = 1
        timeout = 3
        """,
        encoding="utf-8",
    )
    return f


def test_main_prints_replies(config_file, fake_socket, router_reply, capsys):
    sock = fake_socket(
        router_reply(
            ["!done"],
            ["!re", "=.id=*1", "=name=ether1"],
            ["!re", "=.id=*2", "=name=ether2"],
            ["!done"],
        )
    )

    with patch("socket.create_connection", return_value=sock):
        code = cli.main(["--config", str(config_file), "/interface/print", "?type=ether"])

    assert code == cli.EXIT_OK
    assert sock.sent_sentences()[1] == ["/interface/print", "?type=ether"]
    out = capsys.readouterr().out
    assert out == ".id=*1\nname=ether1\n\n.id=*2\nname=ether2\n"
    assert sock.closed is True


def test_main_trap_goes_to_stderr(config_file, fake_socket, router_reply, capsys):
    sock = fake_socket(
        router_reply(["!done"], ["!trap", "=message=no such command"], ["!done"])
    )

    with patch("socket.create_connection", return_value=sock):
        code = cli.main(["--config", str(config_file), "/nope"])

    assert code == cli.EXIT_TRAP
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "!trap\nmessage=no such command" in captured.err


def test_main_config_error(tmp_path):
    code = cli.main(["--config", str(tmp_path / "missing.toml"), "/system/resource/print"])
    assert code == cli.EXIT_CONFIG


def test_main_connect_failure(config_file):
    with patch("socket.create_connection", side_effect=OSError("refused")):
        code = cli.main(["--config", str(config_file), "/system/resource/print"])

    assert code == cli.EXIT_CONNECT


def test_load_cli_config_debug_flag(config_file):
    args = argparse.Namespace(
        config=config_file, profile="default", env_file=None, debug=True
    )

    config = cli.load_cli_config(args)

    assert config.debug is True
    assert config.host == "192.168.88.1"


def test_main_framing_error(config_file, fake_socket, router_reply):
    """回复中出现非法长度前缀时返回协议错误退出码"""
    sock = fake_socket(router_reply(["!done"]) + b"\xff")

    with patch("socket.create_connection", return_value=sock):
        code = cli.main(["--config", str(config_file), "/system/resource/print"])

    assert code == cli.EXIT_PROTOCOL
    assert sock.closed is True
