"""
Base64 helpers shared by the keypair and token formats.

Both formats are plain concatenations of standard (padded) base64 fields, so
every boundary is a multiple of four characters computed from byte lengths.
"""

import base64
import binascii

from an.errors import InvalidEncoding


def encoded_length(size: int) -> int:
    """Length of the padded base64 encoding of ``size`` bytes."""
    return 4 * ((size + 2) // 3)


def b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def b64decode(text: str, field: str = "value") -> bytes:
    """
    Strictly decode standard base64.

    Only the canonical encoding is accepted: unused low bits in the last
    character before padding must be zero, so every distinct string decodes
    to distinct bytes.

    Raises:
        InvalidEncoding: On characters outside the alphabet, bad padding or
            non-canonical trailing bits.
    """
    try:
        raw = base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidEncoding(f"Malformed base64 in {field}: {e}") from e
    if b64encode(raw) != text:
        raise InvalidEncoding(f"Non-canonical base64 in {field}")
    return raw
