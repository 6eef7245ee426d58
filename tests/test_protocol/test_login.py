# tests/test_protocol/test_login.py
import pytest

from routeros_core.protocols.login import (
    LoginReply,
    build_challenge_login_words,
    build_login_words,
    calculate_challenge_response,
    is_login_done,
    parse_login_reply,
)

CHALLENGE = "ebddd18303a54111e2dea05a92ab46b4"
# "00" + md5(0x00 + b"secret" + unhex(CHALLENGE))
EXPECTED_RESPONSE = "007319531c22b6b85e160d6ac355c1df2e"


def test_build_login_words():
    assert build_login_words("admin", "secret") == [
        "/login",
        "=name=admin",
        "=password=secret",
    ]


def test_build_challenge_login_words():
    assert build_challenge_login_words("admin", "00abc") == [
        "/login",
        "=name=admin",
        "=response=00abc",
    ]


def test_challenge_response_vector():
    """固定向量: password="secret", challenge=CHALLENGE"""
    response = calculate_challenge_response("secret", CHALLENGE)

    assert response == EXPECTED_RESPONSE
    assert len(response) == 34


def test_challenge_response_depends_on_password():
    assert calculate_challenge_response("", CHALLENGE) != EXPECTED_RESPONSE
    assert calculate_challenge_response("", CHALLENGE).startswith("00")


@pytest.mark.parametrize(
    "words",
    [
        ["!done"],
        ["!done", ""],
    ],
)
def test_parse_plain_accepted(words):
    assert parse_login_reply(words) == (LoginReply.ACCEPTED, None)


def test_parse_legacy_challenge():
    reply, challenge = parse_login_reply(["!done", f"=ret={CHALLENGE}", ""])

    assert reply is LoginReply.CHALLENGE
    assert challenge == CHALLENGE


@pytest.mark.parametrize(
    "words",
    [
        [],
        [""],
        ["!trap", "=message=invalid user name or password (6)", ""],
        ["!done", "=ret=NOT-HEX", ""],
        ["!done", "=ret=ABCDEF"],
    ],
)
def test_parse_rejected(words):
    assert parse_login_reply(words) == (LoginReply.REJECTED, None)


def test_is_login_done():
    assert is_login_done(["!done", ""]) is True
    assert is_login_done(["!trap", "=message=cannot log in", ""]) is False
    assert is_login_done([]) is False
