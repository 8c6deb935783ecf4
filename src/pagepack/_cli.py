"""pagepack CLI — pagepack build / pagepack config / pagepack dev.

Entry point for the ``pagepack`` command-line interface.
"""

from __future__ import annotations

import argparse
import json
import sys

from pagepack._errors import PagepackError

_MODES = ("development", "production")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the pagepack CLI."""
    parser = argparse.ArgumentParser(
        prog="pagepack",
        description="Static-site build orchestrator.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # pagepack build
    build_parser = subparsers.add_parser(
        "build",
        help="Render pages, copy assets and write the bundler config",
    )
    build_parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    build_parser.add_argument(
        "--mode", choices=_MODES, default="production", help="Build mode",
    )
    build_parser.add_argument("--output", default=None, help="Output directory")

    # pagepack config
    config_parser = subparsers.add_parser(
        "config",
        help="Print the assembled bundler config as JSON",
    )
    config_parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    config_parser.add_argument(
        "--mode", choices=_MODES, default="production", help="Build mode",
    )
    config_parser.add_argument(
        "--serve", action="store_true", help="Include the dev-server block",
    )

    # pagepack dev
    dev_parser = subparsers.add_parser(
        "dev",
        help="Build in development mode and rebuild on changes",
    )
    dev_parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    dev_parser.add_argument("--port", type=int, default=None, help="Dev server port")

    return parser


def _get_version() -> str:
    """Get the package version."""
    from pagepack import __version__

    return __version__


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from pagepack.app import build, dev, show_config

    try:
        if args.command == "build":
            build(root=args.root, mode=args.mode, output=args.output)
        elif args.command == "config":
            data = show_config(root=args.root, mode=args.mode, serve=args.serve or None)
            print(json.dumps(data, indent=2))
        elif args.command == "dev":
            dev(root=args.root, dev_port=args.port)
    except PagepackError as exc:
        print(f"pagepack: error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
