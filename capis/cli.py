"""Command line entry point: run the requests described by YAML files."""

from __future__ import annotations

import sys
from typing import NamedTuple, Sequence

from capis import log
from capis.easy_curl import RequestError, do_easy_curl
from capis.metadata import print_metadata
from capis.read_yaml import MetadataError, read_yaml


class Arguments(NamedTuple):
    """Parsed command line."""

    paths: list[str]
    verbose: bool


def parse_args(argv: Sequence[str]) -> Arguments:
    """Collect file paths and the verbose flag; unknown options are ignored."""
    paths: list[str] = []
    verbose = False
    for arg in argv:
        if not arg.startswith("-"):
            paths.append(arg)
        elif arg in ("--verbose", "-v"):
            verbose = True
    return Arguments(paths, verbose)


def _process(path: str, verbose: bool) -> None:
    try:
        handle = open(path, "rb")
    except OSError:
        log.error(f"Failed to open {path}")
        return

    with handle:
        log.info(f"Processing METADATA: {path}")
        try:
            metadata = read_yaml(handle)
        except MetadataError as exc:
            log.error(str(exc))
            return

    if verbose:
        print_metadata(metadata)

    try:
        do_easy_curl(metadata, verbose)
    except RequestError:
        log.error(f"Request failed for {path}")
    else:
        log.info(f"Request completed for {path}")


def main(argv: Sequence[str] | None = None) -> int:
    """Run every request file named on the command line."""
    log.info("CAPIS RUNNING")
    args = parse_args(sys.argv[1:] if argv is None else argv)
    for path in args.paths:
        _process(path, args.verbose)
    return 0


if __name__ == "__main__":
    sys.exit(main())