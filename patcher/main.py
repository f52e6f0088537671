# coding=utf-8
# SPDX-License-Identifier: Apache-2.0
"""
Command-line entry point.

Resolves the platform, loads the bundle, runs the engine over the tracked
descriptors and writes the result back only if something changed.
"""

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from . import config
from .errors import ArtifactError, DuplicatePatchName
from .platforms import resolve_platform
from .services.artifact_io import load_artifact, write_if_changed
from .services.engine import apply_patches
from .services.report import EXIT_ERROR, exit_code, format_failure, format_report
from .structures.schemas import PatchDescriptor

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="azeron-patch",
        description="Patch the Azeron Software main-process bundle for non-Windows platforms.",
    )
    parser.add_argument(
        "platform",
        nargs="?",
        default=None,
        help="Target platform (default: host platform), e.g. linux, linux-arm64, darwin",
    )
    parser.add_argument(
        "--platform",
        dest="platform_override",
        default=None,
        help="Platform override; wins over the positional argument "
        "(env: AZERON_PATCH_PLATFORM)",
    )
    parser.add_argument(
        "--target",
        default=None,
        help=f"Bundle to patch (env: AZERON_PATCH_TARGET, default: {config.PATCH_TARGET})",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Report what would be applied without writing",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List the tracked patches in order and exit",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (env: AZERON_PATCH_LOG_LEVEL, default: {config.LOG_LEVEL})",
    )
    return parser


def setup_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=(level or config.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )


def list_patches(descriptors: Sequence[PatchDescriptor]) -> List[str]:
    lines = []
    for index, descriptor in enumerate(descriptors, 1):
        platforms = ", ".join(sorted(descriptor.platforms)) if descriptor.platforms else "all"
        lines.append(f"{index:>3}. {descriptor.name} [{platforms}]")
    return lines


def run(
    argv: Optional[Sequence[str]] = None,
    descriptors: Optional[Sequence[PatchDescriptor]] = None,
    host: Optional[str] = None,
) -> int:
    """Run the patcher; returns the process exit status."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    if descriptors is None:
        from patches.main_process import MAIN_PROCESS_PATCHES

        descriptors = MAIN_PROCESS_PATCHES

    if args.list:
        for line in list_patches(descriptors):
            print(line)
        return 0

    platform = resolve_platform(
        override=args.platform_override or config.PATCH_PLATFORM,
        cli_arg=args.platform,
        host=host,
    )
    target = args.target or config.PATCH_TARGET
    logger.info(f"Patching {target} for platform {platform}")

    try:
        original = load_artifact(target)
        result = apply_patches(
            original,
            descriptors,
            platform,
            strict_multiplicity=config.STRICT_MULTIPLICITY,
        )
        failed = result.failed
        if failed is not None:
            for line in format_failure(failed):
                print(line, file=sys.stderr)
            return exit_code(result.outcomes)

        if not args.check:
            write_if_changed(target, original, result.buffer)
    except (ArtifactError, DuplicatePatchName) as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_ERROR

    print(f"Platform: {platform}")
    for line in format_report(result, check=args.check):
        print(line)
    return exit_code(result.outcomes)


def main() -> int:
    return run(sys.argv[1:])


if __name__ == "__main__":
    sys.exit(main())
