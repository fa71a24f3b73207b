"""rdbsite - Static website generator for libretro game databases."""

import argparse
import logging
import time

import server
from config import SiteConfig
from errors import BuildError, SiteError
from pages import build

logging.basicConfig(level=logging.WARNING, format="%(message)s")
logger = logging.getLogger(__name__)


def run_build(config: SiteConfig) -> int:
    print()
    print(f"  rdbsite - Building {config.database_dir}/ into {config.output_dir}/")
    print()

    started = time.monotonic()
    try:
        report = build(config)
    except BuildError as exc:
        for system, err in sorted(exc.errors.items()):
            logger.error("  FAILED %s: %s", system, err)
        logger.error("  Build failed, %s may be incomplete.", config.output_dir)
        return 1
    except SiteError as exc:
        logger.error("  Build failed: %s", exc)
        return 1

    elapsed = time.monotonic() - started
    print(f"  Systems:      {report.systems}")
    print(f"  Index pages:  {report.index_pages:,}")
    print(f"  Game pages:   {report.game_pages:,}")
    print(f"  Tag pages:    {report.tag_pages:,}")
    if report.unreadable:
        print(f"  WARNING: {len(report.unreadable)} database file(s) could not be read.")
    print()
    print(f"  Done in {elapsed:.1f}s. Preview with: python main.py serve")
    print()
    return 0


def run_serve(config: SiteConfig) -> int:
    try:
        server.serve(config)
    except SiteError as exc:
        logger.error("  %s", exc)
        return 1
    except OSError as exc:
        logger.error("  Cannot listen on port %d: %s", config.port, exc)
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate or preview the game database site.")
    parser.add_argument("mode", nargs="?", default="build", help="'serve' to preview, anything else builds")
    args = parser.parse_args(argv)

    try:
        config = SiteConfig.from_env()
    except ValueError as exc:
        logger.error("  Invalid configuration: %s", exc)
        return 1
    if args.mode == "serve":
        return run_serve(config)
    return run_build(config)


if __name__ == "__main__":
    raise SystemExit(main())
