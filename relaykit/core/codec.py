"""Opaque token codec shared by cursors and global ids.

Tokens are URL-safe base64 of UTF-8 text. Decoding is strict: only
canonical encodings are accepted, so every text has exactly one token.
"""

from __future__ import annotations

import base64
import binascii
import re

_TOKEN_RE = re.compile(r"[A-Za-z0-9_-]*={0,2}")


class OpaqueCodec:
    """Encode and decode opaque tokens.

    Usage:
        token = OpaqueCodec.encode("User:42")
        OpaqueCodec.decode(token)  # "User:42"
    """

    @staticmethod
    def encode(text: str) -> str:
        """Encode text to an opaque URL-safe token."""
        return base64.urlsafe_b64encode(text.encode("utf-8")).decode("ascii")

    @staticmethod
    def decode(token: str) -> str:
        """Decode an opaque token back to its text.

        Raises:
            ValueError: If the token is not a canonical encoding of UTF-8 text.
        """
        if not isinstance(token, str) or not _TOKEN_RE.fullmatch(token):
            raise ValueError("Invalid token: unexpected characters")
        try:
            raw = base64.b64decode(token.encode("ascii"), altchars=b"-_", validate=True)
            text = raw.decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise ValueError(f"Invalid token: {e}") from e
        if OpaqueCodec.encode(text) != token:
            raise ValueError("Invalid token: non-canonical encoding")
        return text


__all__ = ["OpaqueCodec"]
