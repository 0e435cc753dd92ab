"""
ZEGO server API request signing

Every call to the ZEGO AI Agent server API carries its public parameters in the
query string. The parameters are sorted by key, joined as ``k=v`` pairs and
signed with HMAC-SHA256 keyed by the server secret.
"""
import hashlib
import hmac
from typing import Any, Dict, Optional
from urllib.parse import quote

from utils.id_generator import generate_nonce
from utils.time_utils import now_seconds

SIGNATURE_VERSION = "2.0"

# Characters encodeURIComponent leaves untouched
_URI_COMPONENT_SAFE = "-_.!~*'()"


def _format_value(value: Any) -> str:
    """Render a query value the way it appears in the signed string"""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def canonical_query(params: Dict[str, Any]) -> str:
    """Sorted, unencoded ``k=v`` string that gets signed"""
    return "&".join(f"{key}={_format_value(params[key])}" for key in sorted(params))


def sign(query: str, server_secret: str) -> str:
    """Hex HMAC-SHA256 digest of query"""
    return hmac.new(
        server_secret.encode("utf-8"),
        query.encode("utf-8"),
        hashlib.sha256
    ).hexdigest()


def generate_signature(params: Dict[str, Any], app_id: str, server_secret: str,
                       timestamp: Optional[int] = None,
                       nonce: Optional[str] = None) -> Dict[str, Any]:
    """Return params extended with the public parameters and their Signature.

    Args:
        params: Request specific parameters, usually just ``Action``
        app_id: ZEGO application id
        server_secret: ZEGO server secret used as the HMAC key
        timestamp: Unix seconds, defaults to now
        nonce: Signature nonce, defaults to 16 random bytes in hex

    Returns:
        Ordered dict of params, AppId, SignatureNonce, Timestamp,
        SignatureVersion and Signature
    """
    base: Dict[str, Any] = {
        **params,
        "AppId": app_id,
        "SignatureNonce": nonce if nonce is not None else generate_nonce(),
        "Timestamp": timestamp if timestamp is not None else now_seconds(),
        "SignatureVersion": SIGNATURE_VERSION,
    }
    base["Signature"] = sign(canonical_query(base), server_secret)
    return base


def encode_query(params: Dict[str, Any]) -> str:
    """Query string in insertion order with encodeURIComponent style values"""
    return "&".join(
        f"{key}={quote(_format_value(value), safe=_URI_COMPONENT_SAFE)}"
        for key, value in params.items()
    )


def build_signed_url(base_url: str, action: str, app_id: str, server_secret: str,
                     timestamp: Optional[int] = None,
                     nonce: Optional[str] = None) -> str:
    """Signed request URL for a ZEGO server API action"""
    signed = generate_signature({"Action": action}, app_id, server_secret,
                                timestamp=timestamp, nonce=nonce)
    return f"{base_url}?{encode_query(signed)}"
