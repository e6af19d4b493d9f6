import re
from typing import Iterable, Optional

HEBREW_WORD = re.compile(r"[\u0590-\u05FF]+")
HEBREW_TEXT = re.compile(r"[\u0590-\u05FF\s]+")
NUMBER = re.compile(r"[0-9]+(\.[0-9]+)?")
CSS_URL = re.compile(r"""url\(\s*(['"]?)(.*?)\1\s*\)""", re.IGNORECASE)

# space, hyphen, underscore, period, comma, semicolon, colon, pipe, exclamation
DEFAULT_DELIMITERS = r"[ \-_.,;:|!]"


def clean_whitespace(s: Optional[str]) -> str:
    return re.sub(r"\s+", " ", (s or "")).strip()


def contains_cashback_keywords(text: Optional[str], keywords: Iterable[str]) -> bool:
    """Literal substring match, no case folding."""
    if not text:
        return False
    return any(k in text for k in keywords)


def extract_number(text: Optional[str]) -> Optional[float]:
    """Return the first integer or decimal numeral in text, or None."""
    if not text:
        return None
    m = NUMBER.search(text)
    return float(m.group(0)) if m else None


def reorder_bidi_text(text: Optional[str], reverse_segments: bool = False) -> str:
    """
    Compensate for visual-order Hebrew coming out of some listing pages.

    Every space-delimited segment made only of Hebrew letters is reversed
    character-wise; digits, percent signs and Latin segments are left alone.
    With reverse_segments, a string that is entirely Hebrew also gets its
    segment order reversed.
    """
    if not text:
        return ""

    segments = [
        seg[::-1] if HEBREW_WORD.fullmatch(seg) else seg
        for seg in text.split(" ")
    ]
    if reverse_segments and HEBREW_TEXT.fullmatch(text):
        segments.reverse()
    return " ".join(segments)


def resolve_url(base: str, relative: Optional[str]) -> Optional[str]:
    """Plain join: strips trailing slashes from base and leading slashes from relative."""
    if not relative:
        return None
    return f"{base.rstrip('/')}/{relative.lstrip('/')}"


def is_absolute_url(url: str) -> bool:
    return url.startswith(("http://", "https://", "//", "data:"))


def unwrap_css_url(value: Optional[str]) -> Optional[str]:
    """Turn a CSS background-image value like url('x.png') into x.png; only the first layer counts."""
    if not value:
        return None
    value = value.strip()
    m = CSS_URL.match(value)
    if m:
        return m.group(2).strip() or None
    if value.lower() == "none":
        return None
    return value


def get_first_word(text: Optional[str], delimiters: str = DEFAULT_DELIMITERS) -> str:
    text = (text or "").strip()
    for token in re.split(delimiters, text):
        if token.strip():
            return token.strip()
    return ""
