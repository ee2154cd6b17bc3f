"""
File content decoding.

GitHub's contents API ships file bodies base64-encoded. Decoding is
best-effort: binary files, and files too large for the API to inline
(encoding "none"), are reported as not decodable instead of raising.
"""

import base64
import binascii
import logging
from typing import Any, Optional, Tuple

logger = logging.getLogger(__name__)

TEXT_ENCODING = "text"


def decode_content(content: Any, encoding: Optional[str]) -> Tuple[str, bool]:
    """
    Decode a contents-API payload to text.

    Returns (text, True) on success and ("", False) when the payload is not
    valid UTF-8 text under the given encoding. Never raises.
    """
    if not isinstance(content, str):
        return "", False

    if not encoding:
        return content, True

    if encoding != "base64":
        # "none" is what GitHub sends for files over 1 MB
        logger.debug(f"Unsupported content encoding: {encoding}")
        return "", False

    try:
        raw = base64.b64decode("".join(content.split()), validate=True)
        return raw.decode("utf-8"), True
    except (binascii.Error, ValueError) as e:
        logger.debug(f"Content is not decodable as text: {e}")
        return "", False
