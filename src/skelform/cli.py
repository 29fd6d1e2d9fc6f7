"""Command line interface for skelform."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from .config import FIELDS, SkeletonLayout, field_by_key
from .io import LocalFileSystem
from .resolver import ValueResolver, console_prompt
from .scaffold import PackageInitializer, ScaffoldResult, StepReport

_FLAG_HELP = {
    "package": "The package name",
    "vendor": "The package vendor name",
    "description": "The package description",
    "package_homepage": "The package homepage",
    "class_name": "The name of the Service Provider class",
    "author": "The author's name",
    "author_email": "The author's email",
    "author_homepage": "The author's homepage",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Turn a package skeleton into a named package")
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init", help="initialize the package")
    for field in FIELDS:
        init_parser.add_argument(field.flag, dest=field.key, help=_FLAG_HELP[field.key])
    init_parser.add_argument(
        "-d",
        "--directory",
        type=Path,
        default=Path.cwd(),
        help="Root of the skeleton to initialize",
    )
    init_parser.add_argument(
        "-n",
        "--no-interaction",
        action="store_true",
        help="Fail instead of prompting for missing values",
    )
    init_parser.add_argument("-v", "--verbose", action="store_true", help="Log every step")

    return parser


def _print_step(report: StepReport) -> None:
    if report.renamed_to:
        print(f"renamed {report.path} -> {report.renamed_to}")
    else:
        print(f"updated {report.path}")


def _flag_for(key: str) -> str:
    try:
        return field_by_key(key).flag
    except KeyError:
        return "--" + key.replace("_", "-")


def _handle_init(args: argparse.Namespace) -> int:
    flags = {field.key: getattr(args, field.key) for field in FIELDS}
    resolver = ValueResolver(flags, prompt=None if args.no_interaction else console_prompt)
    initializer = PackageInitializer(
        LocalFileSystem(args.directory),
        SkeletonLayout(),
        on_step=_print_step,
    )
    result: ScaffoldResult = initializer.run(resolver)
    if not result.ok:
        where = f" ({result.failed_step})" if result.failed_step else ""
        print(f"error{where}: {result.message}", file=sys.stderr)
        if result.field and not resolver.interactive:
            print(f"hint: pass {_flag_for(result.field)} or drop --no-interaction", file=sys.stderr)
        return result.exit_code

    print(f"Package {result.metadata.namespace} initialized in {args.directory}")
    return result.exit_code


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.command == "init":
        return _handle_init(args)
    parser.error("no command provided")
    return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
