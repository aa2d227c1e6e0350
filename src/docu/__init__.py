"""
Docu Package

Merges the per-file syntax trees of one package into a single canonical
tree, prunes it to the exported API, and renders one-line signatures for
documentation writers.

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - Parsing source text (done by an external parser)
    - Walking file systems
    - Documentation page layout or templating

It works on in-memory trees only, apart from the optional path
resolution in docu.paths and the tree loader in docu.serialization.
"""

__version__ = "0.1.0"
