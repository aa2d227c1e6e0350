"""Exceptions raised by Docu."""


class DocuError(Exception):
    """Base class for all Docu errors."""
    pass


class DuplicateUnit(DocuError):
    """Raised when the same file path is registered twice under one package key."""

    def __init__(self, key: str, path: str):
        super().__init__(f"Duplicates: {path} (package {key})")
        self.key = key
        self.path = path


class UnresolvedPackagePath(DocuError):
    """Raised when a source directory cannot be mapped to an import path."""

    def __init__(self, path: str):
        super().__init__(f"Cannot resolve import path: {path}")
        self.path = path


class ParseError(DocuError):
    """Raised when a serialized compilation unit cannot be decoded."""
    pass
