import json
import re
import unicodedata

_MAX_SAFE_NAME_LENGTH = 128
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_]")
_LEADING_NON_LETTERS = re.compile(r"^[^A-Za-z]+")


def _remove_diacritics(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(c for c in decomposed if unicodedata.category(c) != "Mn")


def to_safe_name(text: str | None) -> str:
    """Reduce free text to an identifier usable as a lookup key and field prefix.

    Diacritics are folded, anything other than ASCII letters, digits and
    underscores is dropped, leading non-letters are stripped and the result is
    capped at 128 characters.
    """
    if text is None or not text.strip():
        return ""

    name = _UNSAFE_CHARS.sub("", _remove_diacritics(text))
    name = _LEADING_NON_LETTERS.sub("", name)
    return name[:_MAX_SAFE_NAME_LENGTH]


def is_json(text: str | None) -> bool:
    """Return True if ``text`` holds a JSON object or array."""
    if not text:
        return False
    stripped = text.strip()
    if not (
        (stripped.startswith("{") and stripped.endswith("}")) or (stripped.startswith("[") and stripped.endswith("]"))
    ):
        return False
    try:
        json.loads(stripped)
    except ValueError:
        return False
    return True
