import logging
from datetime import timedelta
from unittest.mock import Mock

import jwt
import pytest

import app.admin.auth as auth_module
from app.admin.auth import ADMIN_ROLE, CredentialVerifier, TokenGuard, TokenIssuer
from app.core.datetime_utils import get_now_utc
from app.core.exceptions import TokenVerificationError
from tests.conftest import ADMIN_PASSWORD, ADMIN_USERNAME, JWT_SECRET, make_settings


# ==== 자격 증명 확인 ====

@pytest.mark.parametrize(
    "overrides",
    [
        {"admin_username": None},
        {"admin_password_hash": None},
        {"admin_username": "", "admin_password_hash": ""},
    ],
)
def test_verify_fails_closed_without_admin_identity(overrides, caplog):
    verifier = CredentialVerifier(make_settings(**overrides))
    with caplog.at_level(logging.CRITICAL):
        assert verifier.verify(ADMIN_USERNAME, ADMIN_PASSWORD) is False
    assert "not configured" in caplog.text


def test_verify_wrong_username_skips_hash_comparison(monkeypatch):
    spy = Mock(return_value=True)
    monkeypatch.setattr(auth_module, "verify_password", spy)

    verifier = CredentialVerifier(make_settings())
    assert verifier.verify("not-debbie", ADMIN_PASSWORD) is False
    assert verifier.verify("Debbie", ADMIN_PASSWORD) is False  # 대소문자도 정확히 일치해야 함
    spy.assert_not_called()


def test_verify_correct_credentials():
    assert CredentialVerifier(make_settings()).verify(ADMIN_USERNAME, ADMIN_PASSWORD) is True


def test_verify_wrong_password():
    assert CredentialVerifier(make_settings()).verify(ADMIN_USERNAME, "wrong-pw") is False


def test_verify_overlong_password_is_plain_mismatch(caplog):
    verifier = CredentialVerifier(make_settings())
    with caplog.at_level(logging.WARNING):
        assert verifier.verify(ADMIN_USERNAME, "x" * 80) is False
        # 앞 72바이트가 실제 비밀번호와 같아도 일치로 보지 않음
        assert verifier.verify(ADMIN_USERNAME, ADMIN_PASSWORD + "y" * 72) is False
    # 설정 오류 알림(CRITICAL)이 발생하지 않아야 함
    assert not [r for r in caplog.records if r.levelno >= logging.CRITICAL]


@pytest.mark.parametrize(
    "bad_hash",
    ["not-a-bcrypt-hash", "$2b$04$tooshort", "$1$" + "a" * 56],
)
def test_verify_malformed_hash_is_rejected(bad_hash, caplog, monkeypatch):
    spy = Mock(return_value=True)
    monkeypatch.setattr(auth_module, "verify_password", spy)
    verifier = CredentialVerifier(make_settings(admin_password_hash=bad_hash))
    with caplog.at_level(logging.CRITICAL):
        assert verifier.verify(ADMIN_USERNAME, ADMIN_PASSWORD) is False
    assert "not a valid bcrypt hash" in caplog.text
    spy.assert_not_called()


# ==== 토큰 발급 / 검증 ====

def _claims():
    return {"username": ADMIN_USERNAME, "role": ADMIN_ROLE, "loginTime": "2026-10-19T09:00:00+00:00"}


def test_issue_returns_none_without_secret(caplog):
    with caplog.at_level(logging.CRITICAL):
        assert TokenIssuer(make_settings(jwt_secret=None)).issue(_claims()) is None
    assert "JWT secret is not configured" in caplog.text


def test_issue_embeds_issued_at_and_expiry():
    settings = make_settings(token_expiry=timedelta(minutes=30))
    token = TokenIssuer(settings).issue(_claims())

    payload = jwt.decode(token, JWT_SECRET, algorithms=["HS256"])
    assert payload["exp"] - payload["iat"] == 30 * 60


def test_token_round_trip_returns_original_claims():
    settings = make_settings()
    token = TokenIssuer(settings).issue(_claims())

    decoded = TokenGuard(settings).verify(token)
    assert "iat" in decoded and "exp" in decoded
    assert {k: v for k, v in decoded.items() if k not in ("iat", "exp")} == _claims()


def test_issue_does_not_mutate_input_claims():
    claims = _claims()
    TokenIssuer(make_settings()).issue(claims)
    assert claims == _claims()


def test_expired_token_is_rejected():
    settings = make_settings(token_expiry=timedelta(hours=1))
    issued_two_hours_ago = lambda: get_now_utc() - timedelta(hours=2)
    token = TokenIssuer(settings, clock=issued_two_hours_ago).issue(_claims())

    with pytest.raises(TokenVerificationError) as exc:
        TokenGuard(settings).verify(token)
    assert exc.value.status_code == 403


def test_token_signed_with_other_secret_is_rejected():
    token = TokenIssuer(make_settings(jwt_secret="pawsome-old-signing-secret-0123456789")).issue(_claims())
    with pytest.raises(TokenVerificationError):
        TokenGuard(make_settings(jwt_secret="pawsome-rotated-signing-secret-012345")).verify(token)


@pytest.mark.parametrize("missing", ["exp", "iat"])
def test_token_without_time_claims_is_rejected(missing):
    now = get_now_utc()
    payload = {**_claims(), "iat": now, "exp": now + timedelta(hours=1)}
    payload.pop(missing)
    # 올바른 키로 서명됐더라도 만료/발급 시각이 없으면 거부
    token = jwt.encode(payload, JWT_SECRET, algorithm="HS256")

    with pytest.raises(TokenVerificationError):
        TokenGuard(make_settings()).verify(token)


def test_garbage_token_is_rejected():
    with pytest.raises(TokenVerificationError):
        TokenGuard(make_settings()).verify("not.a.jwt")


@pytest.mark.parametrize(
    "header, expected",
    [
        ("Bearer abc.def.ghi", "abc.def.ghi"),
        ("Token abc.def.ghi", "abc.def.ghi"),  # scheme 단어는 검사하지 않음
        ("Bearer", None),
        ("Bearer ", None),
        ("", None),
    ],
)
def test_extract_token(header, expected):
    assert TokenGuard.extract_token(header) == expected
