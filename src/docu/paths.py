"""
Mapping between source directories and import paths.

Resolution searches two kinds of roots, each holding sources under "src":
the language install root and a list of workspace roots. Roots are passed
in explicitly as a SearchRoots value; nothing here reads the environment.
"""

import os
from dataclasses import dataclass
from pathlib import PurePath
from typing import Iterator, Tuple

from docu.errors import UnresolvedPackagePath


@dataclass(frozen=True)
class SearchRoots:
    """
    Roots searched for package sources.

    Properties:
        goroot: Language install root ("" when unknown)
        gopaths: Workspace roots, searched in order
    """

    goroot: str = ""
    gopaths: Tuple[str, ...] = ()

    def src_dirs(self) -> Iterator[str]:
        """Yield the "src" directory of every configured root, install root first."""
        for root in (self.goroot,) + tuple(self.gopaths):
            if root:
                yield os.path.join(root, "src")


def abs_path(path: str, roots: SearchRoots) -> str:
    """
    Return an absolute path for path.

    Absolute paths are returned unchanged. Paths starting with "." are
    resolved against the working directory when they exist. Anything else
    is treated as an import path and looked up under each root's "src"
    directory. When nothing exists, path is returned unchanged.
    """
    if path == "" or os.path.isabs(path):
        return path

    if path[0] == ".":
        candidate = os.path.abspath(path)
        if os.path.exists(candidate):
            return candidate

    for src in roots.src_dirs():
        candidate = os.path.abspath(os.path.join(src, path))
        if os.path.exists(candidate):
            return candidate

    return path


def look_import_path(directory: str, roots: SearchRoots) -> str:
    """
    Return the import path of an absolute directory, or "".

    The directory must lie strictly below one root's "src" directory;
    the result uses "/" separators on every platform.
    """
    target = PurePath(os.path.abspath(directory))
    for src in roots.src_dirs():
        try:
            rel = target.relative_to(os.path.abspath(src))
        except ValueError:
            continue
        if rel.parts:
            return "/".join(rel.parts)
    return ""


def resolve_import_path(directory: str, roots: SearchRoots) -> str:
    """
    Like look_import_path, but failing loudly.

    Raises:
        UnresolvedPackagePath: If directory is below none of the roots.
    """
    import_path = look_import_path(directory, roots)
    if import_path == "":
        raise UnresolvedPackagePath(directory)
    return import_path
