import argparse
import logging
import sys
from collections import Counter
from typing import Optional

from navigation.grid import HexGrid
from worldgen.export import ExportError, export_tiles_json, export_tiles_xml
from worldgen.settings import SettingsLoadError, WorldGenSettings, load_settings, settings_from_dict
from worldgen.world import World

logger = logging.getLogger("hexworld")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a deterministic hex world around the origin."
    )
    parser.add_argument("--seed", help="World seed (integer or any string)")
    parser.add_argument(
        "--radius", type=int, default=8, help="Hex radius of the generated area"
    )
    parser.add_argument("--config", help="JSON file with generation settings")
    parser.add_argument("--export-json", metavar="PATH", help="Write tiles as JSON")
    parser.add_argument("--export-xml", metavar="PATH", help="Write tiles as XML")
    parser.add_argument(
        "--view", action="store_true", help="Open the interactive map viewer"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    return parser


def parse_seed(value: Optional[str]):
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return value


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(args.config) if args.config else WorldGenSettings()
    except SettingsLoadError as e:
        logger.error("%s", e)
        return 1
    seed = parse_seed(args.seed)
    if seed is not None:
        settings = settings_from_dict({"seed": seed}, base=settings)

    world = World(settings)
    coords = HexGrid().spiral((0, 0), max(0, args.radius))
    tiles = world.tiles_at(coords)

    counts = Counter(t.biome.label for t in tiles)
    print(f"Seed {settings.seed!r}: {len(tiles)} tiles")
    for label, n in counts.most_common():
        print(f"  {label:<14}{n}")

    try:
        if args.export_json:
            export_tiles_json(tiles, args.export_json)
            logger.info("Wrote %s", args.export_json)
        if args.export_xml:
            export_tiles_xml(tiles, args.export_xml)
            logger.info("Wrote %s", args.export_xml)
    except ExportError as e:
        logger.error("%s", e)
        return 1

    if args.view:
        from ui.map_view import MapView

        selected = MapView(world, radius=args.radius).run()
        if selected:
            print("Selected hex:", selected)
    return 0


if __name__ == "__main__":
    sys.exit(main())
