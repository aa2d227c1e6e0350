"""
Canonical file naming convention.

A package documented in the canonical style lives in a single file named
<anything>_<lang>.go, where <lang> is a known language tag, e.g. doc_zh.go
or api_en.go. The merger marks such packages so callers can tell them apart
from packages that merely collapsed to one file.
"""

import os

# Language tags recognized in canonical file names.
NORMAL_LANGS = frozenset([
    "ar", "bg", "bn", "cs", "da", "de", "el", "en", "es", "fa", "fi", "fr",
    "he", "hi", "hu", "id", "it", "ja", "ko", "ms", "nl", "no", "pl", "pt",
    "ro", "ru", "sk", "sv", "th", "tr", "uk", "vi", "zh",
    "pt-br", "zh-cn", "zh-hk", "zh-tw",
])


def is_normal_lang(lang: str) -> bool:
    """Report whether lang is a known language tag (case-insensitive)."""
    return lang.lower() in NORMAL_LANGS


def normal_lang(filename: str) -> str:
    """
    Return the language tag of a canonical file name, or "".

    The tag is the text between the first "_" and the first "." of the
    base name.

    Examples:
        doc_zh.go       -> "zh"
        api_zh-cn.go    -> "zh-cn"
        widget.go       -> ""
        doc_xx.go       -> ""   (unknown tag)
    """
    base = os.path.basename(filename)
    pos = base.find("_") + 1
    end = base.find(".")
    if pos == 0 or end <= pos:
        return ""
    lang = base[pos:end]
    if is_normal_lang(lang):
        return lang
    return ""


def is_normal_name(filename: str) -> bool:
    """Report whether filename follows the canonical naming convention."""
    return filename.endswith(".go") and normal_lang(filename) != ""
