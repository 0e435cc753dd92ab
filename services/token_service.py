"""
ZEGO RTC login token (version 04)

The browser SDK logs into a room with a token the server mints from the app id
and server secret. The token body is AES-CBC encrypted JSON, packed together
with its expiry and IV and prefixed with the version string "04".
"""
import base64
import json
import secrets
import struct
from typing import Any, Dict, Optional

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from utils.exceptions import TokenGenerationError
from utils.time_utils import now_seconds

TOKEN_VERSION = "04"

ERROR_CODE_APP_ID_INVALID = 1
ERROR_CODE_USER_ID_INVALID = 3
ERROR_CODE_SECRET_INVALID = 5
ERROR_CODE_EFFECTIVE_TIME_IN_SECONDS_INVALID = 6

_IV_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
_IV_LENGTH = 16


def _make_random_iv() -> str:
    return "".join(secrets.choice(_IV_ALPHABET) for _ in range(_IV_LENGTH))


def _make_nonce() -> int:
    # signed 32-bit
    return secrets.randbelow(2 ** 32) - 2 ** 31


def _aes_encrypt(plain_text: str, key: str, iv: str) -> bytes:
    padder = padding.PKCS7(algorithms.AES.block_size).padder()
    data = padder.update(plain_text.encode("utf-8")) + padder.finalize()
    encryptor = Cipher(algorithms.AES(key.encode("utf-8")), modes.CBC(iv.encode("utf-8"))).encryptor()
    return encryptor.update(data) + encryptor.finalize()


def _aes_decrypt(cipher_text: bytes, key: str, iv: bytes) -> str:
    decryptor = Cipher(algorithms.AES(key.encode("utf-8")), modes.CBC(iv)).decryptor()
    data = decryptor.update(cipher_text) + decryptor.finalize()
    unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
    return (unpadder.update(data) + unpadder.finalize()).decode("utf-8")


def generate_token04(app_id: int, user_id: str, secret: str,
                     effective_time_in_seconds: int, payload: str = "",
                     create_time: Optional[int] = None) -> str:
    """Mint a version 04 token for user_id.

    Raises:
        TokenGenerationError: when an argument is invalid; ``code`` identifies
            which one
    """
    if not isinstance(app_id, int) or isinstance(app_id, bool) or app_id == 0:
        raise TokenGenerationError("appID invalid", ERROR_CODE_APP_ID_INVALID)
    if not isinstance(user_id, str) or user_id == "":
        raise TokenGenerationError("userID invalid", ERROR_CODE_USER_ID_INVALID)
    if not isinstance(secret, str) or len(secret) != 32:
        raise TokenGenerationError("secret must be a 32 byte string", ERROR_CODE_SECRET_INVALID)
    if not isinstance(effective_time_in_seconds, int) or effective_time_in_seconds <= 0:
        raise TokenGenerationError(
            "effective_time_in_seconds invalid",
            ERROR_CODE_EFFECTIVE_TIME_IN_SECONDS_INVALID
        )

    ctime = create_time if create_time is not None else now_seconds()
    expire = ctime + effective_time_in_seconds
    token_info = {
        "app_id": app_id,
        "user_id": user_id,
        "nonce": _make_nonce(),
        "ctime": ctime,
        "expire": expire,
        "payload": payload or "",
    }
    plain_text = json.dumps(token_info, separators=(",", ":"), ensure_ascii=False)

    iv = _make_random_iv()
    encrypted = _aes_encrypt(plain_text, secret, iv)

    packed = (
        struct.pack(">q", expire)
        + struct.pack(">h", len(iv))
        + iv.encode("utf-8")
        + struct.pack(">h", len(encrypted))
        + encrypted
    )
    return TOKEN_VERSION + base64.b64encode(packed).decode("utf-8")


def decode_token04(token: str, secret: str) -> Dict[str, Any]:
    """Decrypt a version 04 token back into its JSON body"""
    if not token.startswith(TOKEN_VERSION):
        raise TokenGenerationError("unsupported token version")
    raw = base64.b64decode(token[len(TOKEN_VERSION):])

    offset = 8  # expire
    (iv_len,) = struct.unpack_from(">h", raw, offset)
    offset += 2
    iv = raw[offset:offset + iv_len]
    offset += iv_len
    (cipher_len,) = struct.unpack_from(">h", raw, offset)
    offset += 2
    cipher_text = raw[offset:offset + cipher_len]

    return json.loads(_aes_decrypt(cipher_text, secret, iv))


def room_privilege_payload(room_id: Optional[str] = None) -> str:
    """Payload granting login (1) and publish (2) privileges"""
    return json.dumps({
        "room_id": room_id,
        "privilege": {"1": 1, "2": 1},
        "stream_id_list": None,
    })
