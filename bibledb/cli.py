import argparse
import logging
import sys
from pathlib import Path

from bibledb.config import Settings
from bibledb.errors import ConfigError
from bibledb.etl.etl import convert
from bibledb.etl.stats import render_statistics


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bibledb",
        description="Convert a directory of per-book Bible JSON files into a searchable SQLite database.",
        epilog="Example: bibledb ./BibleJson ./Output",
    )
    parser.add_argument("json_dir", help="Directory containing the book JSON files")
    parser.add_argument("output_dir", help="Directory for bible.db and bible.db.gz")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = Settings.from_env()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    configure_logging(settings.log_level)

    json_dir = Path(args.json_dir)
    output_dir = Path(args.output_dir)

    if not json_dir.is_dir():
        print(f"JSON directory not found: {json_dir}", file=sys.stderr)
        return 1

    output_dir.mkdir(parents=True, exist_ok=True)

    try:
        result = convert(json_dir, output_dir, settings)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print()
    print(render_statistics(result.stats))
    print()
    print("Conversion completed successfully!")
    print(f"Output files saved to: {output_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
