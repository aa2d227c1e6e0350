"""
Synopsis and license detection for comment text.

A synopsis is the first sentence of a doc comment. Comments whose first
sentence is a copyright, "all rights" or author notice have no synopsis;
a "copyright" comment without one is a license block.
"""

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from docu.model import CompilationUnit

# Synopses starting with these are not synopses (see synopsis()).
ILLEGAL_PREFIXES = ("copyright", "all rights", "author")

_BLANK_LINE_RE = re.compile(r"\n\s*\n")


def _first_sentence(s: str) -> str:
    ppp, pp, p = " ", " ", " "
    for i, q in enumerate(s):
        if q in "\n\r\t":
            q = " "
        if q == " " and p == "." and (not pp.isupper() or ppp.isupper()):
            return s[:i]
        if p in ("。", "．"):
            return s[:i]
        ppp, pp, p = pp, p, q
    return s


def synopsis(text: str) -> str:
    """
    Return the first sentence of the first paragraph of text.

    Whitespace is collapsed to single spaces. Text that starts with a
    copyright, "all rights" or author notice has no synopsis and yields "".
    """
    paragraph = _BLANK_LINE_RE.split(text.strip(), maxsplit=1)[0]
    sentence = " ".join(_first_sentence(paragraph).split())
    if sentence.lower().startswith(ILLEGAL_PREFIXES):
        return ""
    return sentence


def is_license(text: str) -> bool:
    """
    Report whether comment text reads as a license notice.

    The first space-delimited word must be "copyright" (case-insensitive)
    and the text must not read as a one-line synopsis.
    """
    word, sep, _ = text.partition(" ")
    if not sep or word.lower() != "copyright":
        return False
    return synopsis(text) == ""


def license_text(unit: "CompilationUnit") -> str:
    """Return the text of the first license block among unit's comments, or ""."""
    for block in unit.comments:
        text = block.text()
        if is_license(text):
            return text
    return ""
