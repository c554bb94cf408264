"""Phone numbers, URLs and free-text descriptions."""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from urllib.parse import urlsplit

from .text import collapse_whitespace

DESCRIPTION_MAX_LENGTH = 500
_NON_DIGITS = re.compile(r"\D")
_HTML_TAG = re.compile(r"<[^>]+>")
_ELLIPSIS = "..."


@dataclass(slots=True, frozen=True)
class PhoneResult:
    value: str | None
    normalized: bool


def normalize_phone(
    value: str | None,
    *,
    country_code: str = "1",
    national_digits: int = 10,
) -> PhoneResult:
    """Convert a phone number to E.164 where the digits allow it.

    Input that cannot be converted is kept verbatim with ``normalized=False``
    so the caller can flag it for review instead of losing it.
    """

    if value is None:
        return PhoneResult(None, normalized=True)
    text = value.strip()
    if not text:
        return PhoneResult(None, normalized=True)
    digits = _NON_DIGITS.sub("", text)
    if text.startswith("+") and 8 <= len(digits) <= 15:
        return PhoneResult(f"+{digits}", normalized=True)
    if len(digits) == national_digits:
        return PhoneResult(f"+{country_code}{digits}", normalized=True)
    if len(digits) == national_digits + len(country_code) and digits.startswith(country_code):
        return PhoneResult(f"+{digits}", normalized=True)
    return PhoneResult(text, normalized=False)


def normalize_website(value: str | None) -> str | None:
    """Keep absolute http(s) URLs; bare host names get ``https://``."""

    if value is None:
        return None
    text = value.strip()
    if not text or any(ch.isspace() for ch in text):
        return None
    if "://" not in text:
        if text.startswith(("mailto:", "tel:", "javascript:", "/")):
            return None
        host = text.split("/", 1)[0]
        if "." not in host:
            return None
        text = f"https://{text}"
    parts = urlsplit(text)
    if parts.scheme.lower() not in {"http", "https"} or not parts.netloc:
        return None
    return text


def clean_description(
    value: str | None, *, max_length: int = DESCRIPTION_MAX_LENGTH
) -> str | None:
    if value is None:
        return None
    text = collapse_whitespace(html.unescape(_HTML_TAG.sub(" ", value)))
    if not text:
        return None
    if len(text) > max_length:
        return text[: max_length - len(_ELLIPSIS)].rstrip() + _ELLIPSIS
    return text
