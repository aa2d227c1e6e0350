"""Deterministic ordering of import specs."""

from typing import Iterable, List

from docu.nodes import ImportSpec


def sort_imports(imports: Iterable[ImportSpec]) -> List[ImportSpec]:
    """
    Return imports sorted lexicographically by path.

    The sort is stable: specs with equal paths keep their relative order.
    Grouping standard library and third-party paths is left to renderers.
    """
    return sorted(imports, key=lambda spec: spec.path)
