import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .cache import CatalogCache
from .config import get_settings
from .errors import CultureKernelError
from .render import RESET, RenderMode, render
from .seed_guard import ensure_healthy, force_reseed

GREEN_BOLD = "\x1b[1;32m"
YELLOW_BOLD = "\x1b[1;33m"
RED_BOLD = "\x1b[1;31m"

def _paint(text: str, style: str, color: bool) -> str:
    return f"{style}{text}{RESET}" if color else text

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="culture-kernel", description="The Operating System for Organizational Culture")
    p.add_argument("--db", default=None, help="Path to the catalog store (default: $CULTURE_KERNEL_DB or culture.db)")
    p.add_argument("--log-level", default=None, help="Logging level (default: $CULTURE_KERNEL_LOG_LEVEL or INFO)")
    sub = p.add_subparsers(dest="cmd")

    sv = sub.add_parser("serve", help="Start the HTTP API server")
    sv.add_argument("--host", default=None, help="Host to bind")
    sv.add_argument("--port", type=int, default=None, help="Port to bind")

    ls = sub.add_parser("list", help="List all rituals in the catalog")
    ls.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    ls.add_argument("--no-color", action="store_true", help="Disable terminal colors")

    sd = sub.add_parser("seed", help="Replace the catalog with the bundled rituals")
    sd.add_argument("--no-color", action="store_true", help="Disable terminal colors")

    return p

def _list(db_path: str, as_json: bool, color: bool) -> None:
    with ensure_healthy(db_path) as store:
        cache = CatalogCache.load(store)
    mode = RenderMode.STRUCTURED if as_json else RenderMode.TABULAR
    out = render(cache, mode, color=color)
    sys.stdout.write(out.body if out.body.endswith("\n") else out.body + "\n")

def _seed(db_path: str, color: bool) -> None:
    force_reseed(db_path).close()
    print(_paint("Database seeded successfully.", GREEN_BOLD, color))

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = get_settings().with_overrides(
            db_path=args.db,
            log_level=args.log_level.upper() if args.log_level else None,
            host=getattr(args, "host", None),
            port=getattr(args, "port", None),
        )
    except ValueError as e:
        print(_paint(f"error: {e}", RED_BOLD, sys.stderr.isatty()), file=sys.stderr)
        return 1
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    color = not getattr(args, "no_color", False) and sys.stdout.isatty()

    if args.cmd is None:
        print(_paint(f"Culture Kernel v{__version__}", YELLOW_BOLD, sys.stdout.isatty()))
        print("Run 'culture-kernel --help' for commands.")
        return 0

    try:
        if args.cmd == "list":
            _list(settings.db_path, args.json, color)
        elif args.cmd == "seed":
            _seed(settings.db_path, color)
        elif args.cmd == "serve":
            import uvicorn
            from .main import create_app, load_catalog
            cache = load_catalog(settings)
            uvicorn.run(create_app(settings, cache), host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    except CultureKernelError as e:
        print(_paint(f"error: {e}", RED_BOLD, sys.stderr.isatty()), file=sys.stderr)
        return 1
    return 0
