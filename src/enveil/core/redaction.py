# SPDX-License-Identifier: MIT
"""
Central redaction utilities for Enveil.

Every line preview that leaves the detector (text report, JSON report,
verbose events) goes through :func:`mask_line`, so no raw secret material
is ever shown.
"""

from __future__ import annotations

MASK_CHAR = "*"
MAX_PREVIEW_CHARS = 50
TRUNCATION_MARKER = "..."

# Symbols that commonly appear inside keys and tokens
_MASKED_SYMBOLS = frozenset("-_+/=")


def _should_mask(char: str) -> bool:
    return char.isalnum() or char in _MASKED_SYMBOLS


def mask_line(line: str) -> str:
    """
    Mask a line for safe display.

    Alphanumeric characters and ``- _ + / =`` become ``*``; delimiters and
    punctuation stay so the structure of the line is still readable.
    Results longer than 50 characters are cut to 50 and get ``...`` appended.

    Masking is idempotent: ``*`` and ``.`` are never masked, so a masked line
    is returned unchanged.

    Args:
        line: A single line of text (without the newline)

    Returns:
        Masked preview of the line
    """
    masked = "".join(MASK_CHAR if _should_mask(c) else c for c in line)
    if len(masked) > MAX_PREVIEW_CHARS:
        return masked[:MAX_PREVIEW_CHARS] + TRUNCATION_MARKER
    return masked
