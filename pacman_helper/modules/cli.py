# pacman_helper/modules/cli.py
"""
Command line for pacman-helper.
- Uses rich for console output and the `show` table.
- Results go to stdout, one per line; messages go to stderr.

Usage examples:
  pacman-helper get-unique-deps linux
  pacman-helper sd firefox --strict
  pacman-helper --db /tmp/fake-local show coreutils
"""

from __future__ import annotations
import argparse
import sys
import traceback
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from pacman_helper.modules import logger as _logger
from pacman_helper.modules.config import HelperConfig, config as _default_config
from pacman_helper.modules.database import DatabaseError
from pacman_helper.modules.query import PackageQuery, QueryResult

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_UNEXPECTED = 3
EXIT_DB_ERROR = 4


def make_console(no_color: bool, quiet: bool = False, stderr: bool = False) -> Console:
    if no_color:
        return Console(color_system=None, markup=False, highlight=False, quiet=quiet, stderr=stderr)
    return Console(highlight=False, quiet=quiet, stderr=stderr)


class CLI:
    def __init__(self, out: Console, err: Console, cfg=None, db_path: Optional[str] = None, strict: bool = False):
        self.out = out
        self.err = err
        self.cfg = cfg or _default_config
        self.db_path = db_path
        self.strict = strict
        self.log = _logger.Logger("cli", cfg=self.cfg)

    def _query(self) -> PackageQuery:
        return PackageQuery.from_database(path=self.db_path, cfg=self.cfg)

    def _print_result(self, result: QueryResult) -> int:
        if not result.found:
            self.err.print(result.message, markup=False)
            return EXIT_NOT_FOUND if self.strict else EXIT_OK
        for item in result:
            self.out.print(item, markup=False, soft_wrap=True)
        return EXIT_OK

    def cmd_unique_deps(self, args: argparse.Namespace) -> int:
        result = self._query().unique_dependencies(args.package)
        self.log.debug(f"get-unique-deps {args.package}: {result!r}")
        return self._print_result(result)

    def cmd_same_deps(self, args: argparse.Namespace) -> int:
        result = self._query().packages_with_same_dependencies(args.package)
        self.log.debug(f"get-pacs-with-same-deps {args.package}: {result!r}")
        return self._print_result(result)

    def cmd_show(self, args: argparse.Namespace) -> int:
        pkg = self._query().package(args.package)
        if pkg is None:
            self.err.print(f"Package '{args.package}' is not installed", markup=False)
            return EXIT_NOT_FOUND if self.strict else EXIT_OK
        table = Table(title=Text(pkg.name), show_header=False)
        table.add_column("field", style="bold")
        table.add_column("value")
        table.add_row("Version", Text(pkg.version or "-"))
        table.add_row("Description", Text(pkg.description or "-"))
        table.add_row("Installed size", str(pkg.size) if pkg.size is not None else "-")
        table.add_row("Depends on", Text(", ".join(pkg.dependencies) or "none"))
        table.add_row("Optional deps", Text(", ".join(pkg.opt_dependencies) or "none"))
        self.out.print(table)
        return EXIT_OK


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="pacman-helper", description="Dependency queries over the local pacman database")
    ap.add_argument("--db", help="Database root (default: [database] path or /var/lib/pacman/local)")
    ap.add_argument("--conf", help="Path to pacman-helper.conf")
    ap.add_argument("--no-color", action="store_true", help="Disable color output")
    ap.add_argument("--quiet", action="store_true", help="Don't explain empty results")
    ap.add_argument("--strict", action="store_true", help="Exit with status 1 when nothing is found")
    sub = ap.add_subparsers(dest="command", required=True)

    p_unique = sub.add_parser("get-unique-deps", aliases=["ud"],
                              help="Get dependencies that are unique to the given package")
    p_unique.add_argument("package", help="Package name")

    p_same = sub.add_parser("get-pacs-with-same-deps", aliases=["sd"],
                            help="Get packages that share dependencies with the given package")
    p_same.add_argument("package", help="Package name")

    p_show = sub.add_parser("show", aliases=["sh"], help="Show the parsed descriptor of a package")
    p_show.add_argument("package", help="Package name")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    parser = build_argparser()
    args = parser.parse_args(argv)

    cfg = HelperConfig([args.conf]) if args.conf else _default_config
    out = make_console(args.no_color)
    err = make_console(args.no_color, quiet=args.quiet, stderr=True)
    cli = CLI(out, err, cfg=cfg, db_path=args.db, strict=args.strict)

    cmd = args.command
    try:
        if cmd in ("get-unique-deps", "ud"):
            return cli.cmd_unique_deps(args)
        if cmd in ("get-pacs-with-same-deps", "sd"):
            return cli.cmd_same_deps(args)
        if cmd in ("show", "sh"):
            return cli.cmd_show(args)
        err.print("Unknown command", markup=False)
        return EXIT_UNEXPECTED
    except DatabaseError as e:
        # a failed load is reported even in quiet mode
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_DB_ERROR
    except Exception as e:
        print(f"Unhandled error: {e}", file=sys.stderr)
        cli.log.debug(traceback.format_exc())
        return EXIT_UNEXPECTED


if __name__ == "__main__":
    raise SystemExit(main())
