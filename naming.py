"""Helpers for turning game titles into display names, tags and file names."""

import re

_PAREN_RE = re.compile(r"\(.*?\)")

# Characters that are not cross-platform safe in file names or that break
# relative links (No-Intro naming rules plus URL delimiters).
ILLEGAL_CHARS = '&*/:`<>?|#%"'
_SCRUB_TABLE = str.maketrans({c: "_" for c in ILLEGAL_CHARS})


def extract_tags(name: str) -> tuple[str, list[str]]:
    """Split a No-Intro style title into its bare name and parenthesized tags.

    "Super Game (USA, En) (Rev 1)" -> ("Super Game", ["USA", "En", "Rev 1"])
    """
    tags = []
    for group in _PAREN_RE.findall(name):
        inner = group.replace("(", "").replace(")", "")
        for piece in inner.split(","):
            piece = piece.strip()
            if piece:
                tags.append(piece)
    return _PAREN_RE.sub("", name).strip(), tags


def without_tags(name: str) -> str:
    return extract_tags(name)[0]


def tags(name: str) -> list[str]:
    return extract_tags(name)[1]


def sanitize(text: str) -> str:
    """Replace each illegal character with an underscore, one for one."""
    return text.translate(_SCRUB_TABLE)
