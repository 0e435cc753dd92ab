"""
Tests for RTC token (version 04) generation
"""
import base64
import json
import struct

import pytest

from services.token_service import (
    ERROR_CODE_APP_ID_INVALID,
    ERROR_CODE_EFFECTIVE_TIME_IN_SECONDS_INVALID,
    ERROR_CODE_SECRET_INVALID,
    ERROR_CODE_USER_ID_INVALID,
    decode_token04,
    generate_token04,
    room_privilege_payload,
)
from utils.exceptions import TokenGenerationError

APP_ID = 1234567890
SECRET = "0123456789abcdef0123456789abcdef"


class TestTokenValidation:
    """Invalid arguments raise TokenGenerationError with a code"""

    @pytest.mark.parametrize("app_id", [0, "1234", None, True])
    def test_invalid_app_id(self, app_id):
        with pytest.raises(TokenGenerationError) as exc_info:
            generate_token04(app_id, "user_1", SECRET, 3600)
        assert exc_info.value.code == ERROR_CODE_APP_ID_INVALID

    @pytest.mark.parametrize("user_id", ["", None, 42])
    def test_invalid_user_id(self, user_id):
        with pytest.raises(TokenGenerationError) as exc_info:
            generate_token04(APP_ID, user_id, SECRET, 3600)
        assert exc_info.value.code == ERROR_CODE_USER_ID_INVALID

    @pytest.mark.parametrize("secret", ["short", SECRET + "x", None])
    def test_invalid_secret(self, secret):
        with pytest.raises(TokenGenerationError) as exc_info:
            generate_token04(APP_ID, "user_1", secret, 3600)
        assert exc_info.value.code == ERROR_CODE_SECRET_INVALID

    @pytest.mark.parametrize("ttl", [0, -10])
    def test_invalid_effective_time(self, ttl):
        with pytest.raises(TokenGenerationError) as exc_info:
            generate_token04(APP_ID, "user_1", SECRET, ttl)
        assert exc_info.value.code == ERROR_CODE_EFFECTIVE_TIME_IN_SECONDS_INVALID


class TestTokenFormat:
    """Token layout and contents"""

    def test_token_has_version_prefix_and_packed_layout(self):
        """04 prefix followed by base64 of expire | iv | ciphertext"""
        token = generate_token04(APP_ID, "user_1", SECRET, 3600, create_time=1700000000)
        assert token.startswith("04")

        raw = base64.b64decode(token[2:])
        (expire,) = struct.unpack_from(">q", raw, 0)
        (iv_len,) = struct.unpack_from(">h", raw, 8)
        iv = raw[10:10 + iv_len]
        (cipher_len,) = struct.unpack_from(">h", raw, 10 + iv_len)

        assert expire == 1700003600
        assert iv_len == 16
        assert all(c in b"0123456789abcdefghijklmnopqrstuvwxyz" for c in iv)
        assert cipher_len % 16 == 0
        assert len(raw) == 10 + iv_len + 2 + cipher_len

    def test_decode_round_trip_body(self):
        """The encrypted body carries app id, user, times and payload"""
        payload = room_privilege_payload()
        token = generate_token04(APP_ID, "user_1", SECRET, 3600, payload, create_time=1700000000)

        body = decode_token04(token, SECRET)

        assert body["app_id"] == APP_ID
        assert body["user_id"] == "user_1"
        assert body["ctime"] == 1700000000
        assert body["expire"] == 1700003600
        assert body["payload"] == payload
        assert -2 ** 31 <= body["nonce"] < 2 ** 31

    def test_tokens_are_not_deterministic(self):
        """Random IV and nonce make every token unique"""
        first = generate_token04(APP_ID, "user_1", SECRET, 3600, create_time=1700000000)
        second = generate_token04(APP_ID, "user_1", SECRET, 3600, create_time=1700000000)
        assert first != second


def test_room_privilege_payload():
    """Payload grants login and publish without binding a room"""
    assert json.loads(room_privilege_payload()) == {
        "room_id": None,
        "privilege": {"1": 1, "2": 1},
        "stream_id_list": None,
    }
