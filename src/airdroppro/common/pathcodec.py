"""
Path tokens for URLs

Filesystem paths travel inside a URL segment as padded URL-safe base64
of their UTF-8 bytes. The string is preserved byte for byte; no case or
separator normalization happens.
"""
import re
import base64
import binascii

from .errors import DecodeError

# A-Z a-z 0-9 - _ with at most two '=' of padding
_TOKEN_RE = re.compile(r"[A-Za-z0-9_-]*={0,2}")


def encode(path: str) -> str:
    """Encode a path string into a URL-safe token"""
    return base64.urlsafe_b64encode(path.encode('utf-8')).decode('ascii')


def decode(token: str) -> str:
    """
    Decode a token produced by encode().

    Raises:
        DecodeError: if the token is not valid padded URL-safe base64,
            or the decoded bytes are not valid UTF-8
    """
    if len(token) % 4 != 0 or not _TOKEN_RE.fullmatch(token):
        raise DecodeError("Failed to decode base64 code")

    try:
        raw = base64.b64decode(token, altchars=b'-_', validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError("Failed to decode base64 code") from e

    # Non-zero unused bits decode fine but name no encode() output
    if base64.urlsafe_b64encode(raw).decode('ascii') != token:
        raise DecodeError("Failed to decode base64 code")

    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError as e:
        raise DecodeError("Failed to convert base64 string to UTF-8") from e
