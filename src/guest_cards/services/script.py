"""Writing-system detection used to pick a card font."""

import re

LATIN_DIACRITICS = (
    "äöüÄÖÜß"
    "àáâãäåçèéêëìíîïðñòóôõöøùúûüýÿ"
    "ÀÁÂÃÄÅÇÈÉÊËÌÍÎÏÐÑÒÓÔÕÖØÙÚÛÜÝ"
)

_LATIN_PATTERN = re.compile(rf"[a-zA-Z{LATIN_DIACRITICS}\s]+")


def is_latin_script(text: str) -> bool:
    """Return true when every character is a Latin letter or whitespace."""
    return _LATIN_PATTERN.fullmatch(text) is not None
