"""Tests for the token issuing script."""

from create_token import main
from qr_codes_api.app.core.security import decode_access_token


def test_prints_token_for_user(capsys):
    assert main(["--user-id", "user-42", "--days", "2"]) == 0
    token = capsys.readouterr().out.strip()
    assert decode_access_token(token)["sub"] == "user-42"


def test_rejects_blank_user_id(capsys):
    assert main(["--user-id", "   "]) == 1
    assert "Empty user id" in capsys.readouterr().err


def test_rejects_non_positive_lifetime(capsys):
    assert main(["--user-id", "u", "--days", "0"]) == 1
