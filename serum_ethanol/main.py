"""
Serum ethanol CLI. Run from project root: python -m serum_ethanol.main
Estimates ethanol mass, peak serum concentration and eBAC for one drink,
and optionally saves a graph.
"""

import argparse
import sys

from serum_ethanol.calculations import ebac, elimination_time, ethanol_ingested, peak_serum_ethanol
from serum_ethanol.clinical import describe
from serum_ethanol.constants import PROFILES, profile_for
from serum_ethanol.exceptions import UnitError
from serum_ethanol.graph import save_ebac_graph
from serum_ethanol.logger import configure_logging, LOGGER
from serum_ethanol.session import DrinkingSession
from serum_ethanol.units import Quantity, grams, hours, mg_per_dl, parse_unit


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Estimate serum ethanol concentration (Widmark)")
    parser.add_argument("--volume", type=float, default=355.0, help="Volume drunk (default 355)")
    parser.add_argument("--volume-unit", default="mL", help="Unit of --volume (mL, L, dL, fl oz)")
    parser.add_argument("--abv", type=float, default=0.05, help="Ethanol fraction, e.g. 0.05 for 5%%")
    parser.add_argument("--weight", type=float, default=70.0, help="Body weight (default 70)")
    parser.add_argument("--weight-unit", default="kg", help="Unit of --weight (kg, lb)")
    parser.add_argument("--hours", type=float, default=0.0, help="Hours since drinking began")
    parser.add_argument("--profile", choices=sorted(PROFILES), default="population",
                        help="Kinetic profile (volume of distribution and elimination rate)")
    parser.add_argument("--graph", type=str, metavar="FILE", help="Save graph to FILE (e.g. ebac.png)")
    parser.add_argument("--log-level", default=None, help="Logging level (default from SERUM_ETHANOL_LOG_LEVEL)")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        volume = Quantity.of(args.volume, parse_unit(args.volume_unit))
        weight = Quantity.of(args.weight, parse_unit(args.weight_unit))
        ethanol = ethanol_ingested(volume, args.abv)
        profile = profile_for(args.profile)
        duration = Quantity.of(args.hours, hours)
        peak = peak_serum_ethanol(ethanol, weight, profile=profile)
        estimate = ebac(ethanol, weight, duration, profile=profile)
        eliminated_after = elimination_time(ethanol, weight, profile=profile)
    except UnitError as exc:
        parser.error(str(exc))
    except ZeroDivisionError:
        parser.error("weight must be > 0")

    LOGGER.info("profile=%s ethanol=%s weight=%s", profile.name, ethanol, weight)

    shown = max(estimate.to(mg_per_dl), 0.0)
    print(f"Ethanol ingested: {ethanol.format(grams)}")
    print(f"Peak serum ethanol: {peak.format(mg_per_dl)}")
    print(f"eBAC after {args.hours:g}h: {shown:.1f} mg/dL (unclamped {estimate.format(mg_per_dl)})")
    print(f"Clinical effects: {describe(estimate)}")
    print(f"Eliminated after: {eliminated_after.format(hours)}")

    if args.graph:
        session = DrinkingSession(weight=weight, profile=profile)
        session.add_ethanol(0.0, ethanol)
        path = save_ebac_graph(session, output_path=args.graph)
        print(f"Graph saved: {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main() or 0)
