#!/usr/bin/env python3
"""
Print delta-v and acceleration for every drive in a data version.

Usage:
    python scripts/accdv_table.py sample --radiator BasicRadiator --data-dir data
    python scripts/accdv_table.py 0.4.80 --radiator LithiumSpray --tanks 20 --hull Frigate
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from accdv.catalog import CatalogLoader, CatalogLoadError
from accdv.components import DataIntegrityError, UnknownComponentError
from accdv.config import LoaderConfig
from accdv.evaluator import ConfigurationOptions
from accdv.session import get_data_for_options, load_data_from_version
from accdv.structure import ArmorThickness


def format_table(result) -> str:
    """Format evaluated drives as a markdown table, best delta-v first."""
    lines = [
        "| Drive | Power Plant | Dry Mass (t) | Wet Mass (t) | Delta-v (km/s) | Accel (g) |",
        "|-------|-------------|--------------|--------------|----------------|-----------|",
    ]
    rows = []
    for pairing in result.evaluated():
        for drive in pairing.drives:
            perf = pairing.performance[drive.data_name]
            rows.append((perf, pairing.power_plant.friendly_name))

    rows.sort(key=lambda r: r[0].delta_v, reverse=True)
    for perf, plant_name in rows:
        lines.append(
            f"| {perf.drive.friendly_name} "
            f"| {plant_name} "
            f"| {perf.dry_mass:,.1f} "
            f"| {perf.wet_mass:,.1f} "
            f"| {perf.delta_v:,.2f} "
            f"| {perf.accel:.4f} |"
        )

    unpaired = [p.family for p in result.pairings if not p.is_evaluated]
    if unpaired:
        lines.append("")
        lines.append(f"No power plant (set --default-plant): {', '.join(unpaired)}")

    s = result.structure
    lines.append("")
    lines.append(
        f"Hull {s.hull:,.1f} t | Armor nose {s.armor_nose:,.1f} t, sides {s.armor_sides:,.1f} t, "
        f"tail {s.armor_tail:,.1f} t | Fuel {s.fuel:,.1f} t"
    )
    return "\n".join(lines)


def main():
    parser = argparse.ArgumentParser(
        description="Terra Invicta acceleration / delta-v table",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python scripts/accdv_table.py sample --radiator BasicRadiator --data-dir data
    python scripts/accdv_table.py sample --radiator BasicRadiator --data-dir data \\
        --tanks 10 --default-plant SolidCoreI --hull Corvette --armor SteelArmor --nose 2
        """,
    )

    parser.add_argument("version", help="Data version identifier")
    parser.add_argument("--radiator", required=True, help="Radiator identifier")
    parser.add_argument("--payload", type=float, default=0.0, help="Payload mass in tons")
    parser.add_argument("--tanks", type=int, default=0, help="Number of fuel tanks")
    parser.add_argument("--default-plant", help="Power plant for reactorless drives")
    parser.add_argument("--hydrogen", help="Hydrogen module identifier")
    parser.add_argument("--spiker", help="Thrust spiker identifier")
    parser.add_argument("--hull", help="Hull identifier")
    parser.add_argument("--armor", help="Armor material identifier")
    parser.add_argument("--nose", type=float, default=0.0, help="Nose armor thickness")
    parser.add_argument("--sides", type=float, default=0.0, help="Side armor thickness")
    parser.add_argument("--tail", type=float, default=0.0, help="Tail armor thickness")

    # Data source
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--data-dir", type=Path, help="Local directory with versions/<version>/")
    source.add_argument("--url", help="Base URL serving versions/<version>/")

    parser.add_argument("--verbose", "-v", action="store_true", help="Print loading progress")

    args = parser.parse_args()

    config = LoaderConfig.from_env()
    if args.data_dir:
        config.data_dir = args.data_dir
    elif args.url:
        config = LoaderConfig(base_url=args.url, timeout=config.timeout)

    try:
        options = ConfigurationOptions(
            radiator=args.radiator,
            payload=args.payload,
            num_fuel_tanks=args.tanks,
            default_power_plant=args.default_plant,
            hydrogen=args.hydrogen,
            spiker=args.spiker,
            hull=args.hull,
            armor=args.armor,
            armor_thickness=ArmorThickness(nose=args.nose, sides=args.sides, tail=args.tail),
        )
        loader = CatalogLoader(config=config, verbose=args.verbose)
        session = load_data_from_version(args.version, loader=loader, verbose=args.verbose)
        result = get_data_for_options(session, options)
    except (CatalogLoadError, DataIntegrityError, UnknownComponentError, ValueError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    print(format_table(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
