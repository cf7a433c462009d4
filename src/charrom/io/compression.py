"""Compression and URL-safe encoding for share tokens.

Payloads are compressed with raw DEFLATE (no zlib header or checksum) and
written as base64url: the standard alphabet with ``+`` and ``/`` replaced
by ``-`` and ``_`` and the ``=`` padding stripped, so the result can sit in
a URL fragment without further escaping.
"""

import base64
import binascii
import zlib

MAX_COMPRESSION_LEVEL = 9

# Negative window bits select raw DEFLATE streams
_RAW_DEFLATE_WBITS = -15


def base64url_encode(data: bytes) -> str:
    """Encode bytes as unpadded base64url."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def base64url_decode(text: str) -> bytes:
    """Decode unpadded (or padded) base64url text.

    Raises:
        ValueError: If the text is not valid base64url
    """
    padded = text + "=" * (-len(text) % 4)
    try:
        return base64.b64decode(padded, altchars=b"-_", validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"invalid base64url data: {e}") from e


def compress(data: bytes, level: int = MAX_COMPRESSION_LEVEL) -> bytes:
    """Compress with raw DEFLATE."""
    compressor = zlib.compressobj(level, zlib.DEFLATED, _RAW_DEFLATE_WBITS)
    return compressor.compress(data) + compressor.flush()


def decompress(data: bytes) -> bytes:
    """Inflate a raw DEFLATE stream.

    Raises:
        ValueError: If the data is corrupt or truncated
    """
    decompressor = zlib.decompressobj(_RAW_DEFLATE_WBITS)
    try:
        result = decompressor.decompress(data) + decompressor.flush()
    except zlib.error as e:
        raise ValueError(f"corrupt compressed data: {e}") from e
    if not decompressor.eof:
        raise ValueError("corrupt compressed data: stream truncated")
    return result
