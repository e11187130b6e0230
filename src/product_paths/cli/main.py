# SPDX-License-Identifier: MIT
"""Command-line interface for inspecting product identity and paths."""

from __future__ import annotations

import argparse
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Callable

import logfire

from product_paths import descriptor
from product_paths.buildinfo import (
    collect_build_info,
    default_build_info_path,
    write_build_info,
)
from product_paths.errors import (
    AlreadyRegisteredError,
    BuildInfoError,
    HostEnvironmentError,
)
from product_paths.observability.monitoring import init_logfire
from product_paths.paths import DirectoryKind, PathResolver, directory_label
from product_paths.product import ProductIdentifier, declare_product
from product_paths.runtime.settings import Settings, load_settings
from product_paths.utils import CollectingErrorHandler

LOG_LEVELS = ["fatal", "error", "warn", "notice", "info", "debug", "trace"]

# Template shown next to the presets by ``describe --all``.
CUSTOM_EXAMPLE = "{NAME} v{VERSION}, {GIT_REF}"

EXIT_CONFIG_ERROR = 1
EXIT_HOST_ERROR = 2


def _package_version() -> str:
    try:
        return version("product-paths")
    except PackageNotFoundError:  # pragma: no cover - fallback for source checkouts
        return "unknown"


def _configure_logging(
    args: argparse.Namespace, settings: Settings, product: ProductIdentifier
) -> None:
    """Configure Logfire from verbosity flags relative to the configured level."""
    index = LOG_LEVELS.index(settings.log_level) + args.verbose - args.quiet
    index = max(0, min(len(LOG_LEVELS) - 1, index))
    init_logfire(
        settings.logfire_token,
        LOG_LEVELS[index],  # type: ignore[arg-type]
        service_name=product.render_name(),
        service_version=product.resolved_version(),
    )


def _build_product(args: argparse.Namespace, settings: Settings) -> ProductIdentifier:
    """Return the product described by settings and command-line overrides."""
    base = args.base or settings.product_base
    product = declare_product(
        base,
        package=settings.product_package,
        version=args.product_version or settings.product_version,
        build_info=settings.build_info_path,
    )
    extensions = args.ext if args.ext is not None else settings.product_extensions
    for extension in extensions:
        product = product.with_extension(extension)
    return product


def _cmd_describe(args: argparse.Namespace, product: ProductIdentifier) -> int:
    """Print descriptors for ``product``."""
    if args.all:
        width = max(len(name) for name in descriptor.FORMATS) + 1
        for name, fmt in descriptor.FORMATS.items():
            label = f"{name.upper().replace('-', '_')}:"
            print(f"{label:<{width + 1}} {descriptor.render(fmt, product)}")
        label = "CUSTOM:"
        print(f"{label:<{width + 1}} {descriptor.render(CUSTOM_EXAMPLE, product)}")
        return 0
    fmt = args.template
    if fmt is None:
        try:
            fmt = descriptor.preset(args.format)
        except KeyError as exc:
            print(f"error: {exc.args[0]}", file=sys.stderr)
            return 1
    print(descriptor.render(fmt, product))
    return 0


def _cmd_paths(args: argparse.Namespace, product: ProductIdentifier) -> int:
    """Print (and create) the product's directories."""
    resolver = PathResolver(product)
    for kind in args.kind or []:
        print(f"{kind.value}: {resolver.application_directory(kind)}")
    print(f"configs: {resolver.configs_root()}")
    print(f"logs: {resolver.logs_root()}")
    for module in args.module or []:
        print(f"config[{module}]: {resolver.config_path(module)}")
    if args.log:
        print(f"log: {resolver.log_path()}")
    return 0


def _cmd_preflight(args: argparse.Namespace, product: ProductIdentifier) -> int:
    """Report directory kinds this platform cannot resolve."""
    handler = CollectingErrorHandler()
    resolver = PathResolver(product, error_handler=handler)
    missing = resolver.unresolvable_kinds()
    for kind in DirectoryKind:
        status = "missing" if kind in missing else "ok"
        print(f"{kind.value:<13} {status:<8} {directory_label(kind)}")
    for message in handler.messages:
        logfire.info(message)
    required = {DirectoryKind.DATA_LOCAL} & set(missing)
    return 1 if required else 0


def _cmd_buildinfo(args: argparse.Namespace, product: ProductIdentifier) -> int:
    """Collect build provenance and write it as JSON."""
    info = collect_build_info(args.repo, version=product.version)
    if args.stdout:
        print(info.model_dump_json(indent=2))
        return 0
    output = Path(args.output) if args.output else default_build_info_path()
    print(write_build_info(info, output))
    return 0


def _add_common_args(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    """Attach product selection and verbosity options to ``parser``."""
    parser.add_argument(
        "--base", help="Base product name. Defaults to PRODUCT_PATHS_PRODUCT_BASE."
    )
    parser.add_argument(
        "--ext",
        action="append",
        help="Extension segment to append; repeat for several.",
    )
    parser.add_argument(
        "--product-version",
        help="Explicit product version overriding package metadata.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity; repeat for more detail.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="count",
        default=0,
        help="Decrease logging verbosity.",
    )
    return parser


def _add_describe_subparser(
    subparsers: argparse._SubParsersAction, common: argparse.ArgumentParser
) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "describe", parents=[common], help="Render a product descriptor."
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "-f",
        "--format",
        default="default",
        help="Preset name: " + ", ".join(descriptor.FORMATS),
    )
    group.add_argument("-t", "--template", help="Custom '{KEY}' template.")
    group.add_argument(
        "--all", action="store_true", help="Print every preset and an example."
    )
    parser.set_defaults(func=_cmd_describe)
    return parser


def _add_paths_subparser(
    subparsers: argparse._SubParsersAction, common: argparse.ArgumentParser
) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "paths", parents=[common], help="Print and create product directories."
    )
    parser.add_argument(
        "--module",
        action="append",
        help="Module whose config file path should be printed.",
    )
    parser.add_argument(
        "--kind",
        action="append",
        type=DirectoryKind,
        help="Additional directory kind: "
        + ", ".join(kind.value for kind in DirectoryKind),
    )
    parser.add_argument(
        "--log", action="store_true", help="Print a new timestamped log path."
    )
    parser.set_defaults(func=_cmd_paths)
    return parser


def _add_preflight_subparser(
    subparsers: argparse._SubParsersAction, common: argparse.ArgumentParser
) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "preflight",
        parents=[common],
        help="Check which directory kinds this platform provides.",
    )
    parser.set_defaults(func=_cmd_preflight)
    return parser


def _add_buildinfo_subparser(
    subparsers: argparse._SubParsersAction, common: argparse.ArgumentParser
) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "buildinfo",
        parents=[common],
        help="Collect git and build host provenance as JSON.",
    )
    parser.add_argument("--repo", default=".", help="Git checkout to inspect.")
    target = parser.add_mutually_exclusive_group()
    target.add_argument(
        "--output", help="File to write. Defaults to PRODUCT_PATHS_BUILD_INFO_PATH."
    )
    target.add_argument(
        "--stdout", action="store_true", help="Print instead of writing a file."
    )
    parser.set_defaults(func=_cmd_buildinfo)
    return parser


def _build_parser() -> argparse.ArgumentParser:
    """Return an argument parser configured with subcommands."""
    parser = argparse.ArgumentParser(
        prog="product-paths",
        description=(
            "Inspect the identity of a product and the per-user directories "
            "namespaced by its name."
        ),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"product-paths {_package_version()}",
    )
    common = _add_common_args(argparse.ArgumentParser(add_help=False))
    subparsers = parser.add_subparsers(dest="command")
    _add_describe_subparser(subparsers, common)
    _add_paths_subparser(subparsers, common)
    _add_preflight_subparser(subparsers, common)
    _add_buildinfo_subparser(subparsers, common)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse arguments and dispatch to the requested subcommand."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 1
    try:
        settings = load_settings()
    except RuntimeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    func: Callable[[argparse.Namespace, ProductIdentifier], int] = args.func
    try:
        product = _build_product(args, settings)
        _configure_logging(args, settings, product)
        try:
            product.set_global()
        except AlreadyRegisteredError as exc:
            logfire.debug("Keeping registered product", error=str(exc))
        return func(args, product)
    except (HostEnvironmentError, BuildInfoError) as exc:
        logfire.error("Command failed", command=args.command, error=str(exc))
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_HOST_ERROR
    finally:
        logfire.force_flush()


if __name__ == "__main__":
    raise SystemExit(main())
