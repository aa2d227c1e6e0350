#!/usr/bin/env python3
"""
Complete Pipeline Demo: parsed files → Registry → Merge → Export → Literals

Shows the full workflow on the two-file "geo" example package:
1. Register the parsed files
2. Merge them into one tree
3. Prune to the exported API
4. Print signatures and the merged tree as YAML
"""

import logging
import tempfile

from docu.config import load_settings
from docu.docu import Docu
from docu.examples import EXAMPLE_IMPORT_PATH, build_example_geo_files
from docu.paths import SearchRoots
from docu.serialization import merged_to_yaml


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    settings = load_settings()
    workspace = tempfile.mkdtemp(prefix="docu-demo-")
    roots = SearchRoots(goroot=settings.goroot, gopaths=(workspace,) + tuple(settings.gopaths()))

    print("=" * 80)
    print("COMPLETE PIPELINE DEMO: Register → Merge → Export → Literals")
    print("=" * 80)

    # =========================================================================
    # STEP 1: Register
    # =========================================================================
    print("\n1. REGISTERING FILES...")
    docu = Docu(roots)
    for path, unit in build_example_geo_files(workspace):
        key = docu.add(path, unit)
        print(f"   ✓ {path} → {key}")

    # =========================================================================
    # STEP 2: Merge
    # =========================================================================
    print("\n2. MERGING PACKAGE...")
    merged = docu.merge(EXAMPLE_IMPORT_PATH)
    print(f"   ✓ Package: {merged.name}")
    print(f"   ✓ Declarations: {len(merged.unit.decls)}")
    print(f"   ✓ License: {merged.license_text().strip()}")
    if merged.import_annotation is not None:
        print(f"   ✓ Import annotation: {merged.import_annotation.text().strip()}")

    # =========================================================================
    # STEP 3: Export
    # =========================================================================
    print("\n3. EXPORTED API:")
    print("-" * 80)
    for lit in docu.literals(EXAMPLE_IMPORT_PATH):
        print(f"   {lit}")

    # =========================================================================
    # STEP 4: YAML
    # =========================================================================
    print("\n4. MERGED TREE (YAML):")
    print("-" * 80)
    print(merged_to_yaml(docu.exported(EXAMPLE_IMPORT_PATH)))


if __name__ == "__main__":
    main()
