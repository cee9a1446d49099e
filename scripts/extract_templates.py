#!/usr/bin/env python3
"""
Copy Terra Invicta template tables into a local data version.

Reads the six templates the calculator needs from the game install and
writes them to data/versions/<version>/, ready for ACCDV_DATA_DIR or
--data-dir. Each table is checked to parse before it is written.

Usage:
    python scripts/extract_templates.py 0.4.80
    python scripts/extract_templates.py 0.4.80 --game-dir "/mnt/d/SteamLibrary/steamapps/common/Terra Invicta"
"""

import argparse
import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from accdv.catalog import TEMPLATE_FILES, Catalog

DEFAULT_GAME_DIR = Path("C:/Program Files (x86)/Steam/steamapps/common/Terra Invicta")
TEMPLATES_SUBDIR = Path("TerraInvicta_Data/StreamingAssets/Templates")
DEFAULT_OUTPUT_DIR = Path(__file__).parent.parent / "data"


def load_json(path: Path) -> list:
    """Load JSON file and return list of objects."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def main():
    parser = argparse.ArgumentParser(description="Copy Terra Invicta templates into a data version")
    parser.add_argument("version", help="Version identifier to write")
    parser.add_argument("--game-dir", type=Path, default=DEFAULT_GAME_DIR, help="Terra Invicta install")
    parser.add_argument("--output-dir", type=Path, default=DEFAULT_OUTPUT_DIR, help="Data directory")
    args = parser.parse_args()

    templates_dir = args.game_dir / TEMPLATES_SUBDIR
    tables = {}
    for name in TEMPLATE_FILES:
        path = templates_dir / name
        print(f"Reading: {path}")
        tables[name] = load_json(path)

    # Fail before writing anything if a record is malformed
    catalog = Catalog.from_tables(args.version, tables)

    version_dir = args.output_dir / "versions" / args.version
    version_dir.mkdir(parents=True, exist_ok=True)
    for name, data in tables.items():
        with open(version_dir / name, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    print(f"\nDone! Wrote version {args.version} to {version_dir}")
    print(f"  Drives: {len(catalog.drives)}")
    print(f"  Power plants: {len(catalog.power_plants)}")
    print(f"  Radiators: {len(catalog.radiators)}")
    print(f"  Utility modules: {len(catalog.utility_modules)}")
    print(f"  Hulls: {len(catalog.hulls)}")
    print(f"  Armor: {len(catalog.armors)}")


if __name__ == "__main__":
    main()
