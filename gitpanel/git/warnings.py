"""Recognizing harmless git stderr output."""

from __future__ import annotations

from typing import Optional

# Notices git prints while normalizing line endings on add/commit/checkout
BENIGN_LINE_ENDING_NOTICES = (
    "LF will be replaced by CRLF",
    "CRLF will be replaced by LF",
    "the file will have its original line endings",
)


def is_benign_warning(stderr: Optional[str]) -> bool:
    """Return True if stderr mentions any known line-ending (CRLF/LF) notice.

    This is a substring match: other text alongside a notice does not make
    the output an error. Empty output is not benign, since there is nothing
    to suppress.
    """
    if not stderr:
        return False

    return any(notice in stderr for notice in BENIGN_LINE_ENDING_NOTICES)
