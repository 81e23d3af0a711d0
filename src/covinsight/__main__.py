# -*- coding:utf-8 -*-

#  ************************** Copyrights and license ***************************
#
# This file is part of covinsight 1.1, a parsing and comparison engine for
# Clover and Cobertura coverage reports.
#
# _____________________________________________________________________________
#
# Copyright (c) 2024-2026 the covinsight authors
#
# This software is distributed under the 3-clause BSD License.
# For more information, see the README.rst file.
#
# ****************************************************************************

import logging
import os
import sys

from argparse import ArgumentError, ArgumentParser, Namespace
from typing import Any, Optional

from .comparing import compare
from .configuration import (
    argument_parser_setup,
    config_entries_from_dict,
    merge_options_and_set_defaults,
    parse_config_file,
    parse_config_into_dict,
)
from .data_model.coverage import CoverageReport
from .diff import Finding, correlate, parse_unified_diff, patch_coverage
from .exceptions import CovinsightError
from .formats import Format, read_report
from .formats.json.write import build_document, write_report
from .logging import (
    configure_logging,
    update_logging,
)
from .merging import merge
from .paths import normalize_report, normalize_reports
from .version import __version__

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

LOGGER = logging.getLogger("covinsight")


EXIT_SUCCESS = 0
EXIT_CMDLINE_ERROR = 1
EXIT_COVERAGE_NOK = 2
EXIT_UNCOVERED_NOK = 4
EXIT_READ_ERROR = 64
EXIT_WRITE_ERROR = 128


def get_exit_code(
    report: CoverageReport,
    findings: Optional[list[Finding]],
    threshold: float,
    fail_on_uncovered: bool,
) -> int:
    """Fail depending on the coverage result."""
    exit_code = EXIT_SUCCESS

    if threshold > 0.0:
        percentage = report.coverage_percentage
        if percentage < threshold:
            LOGGER.error(
                f"failed minimum statement coverage (got {percentage:.1f}%, minimum {threshold}%)"
            )
            exit_code |= EXIT_COVERAGE_NOK

    if fail_on_uncovered and findings:
        for finding in findings:
            LOGGER.error(f"{finding.path}:{finding.line}: {finding.kind}")
        exit_code |= EXIT_UNCOVERED_NOK

    return exit_code


def create_argument_parser() -> ArgumentParser:
    """Create the argument parser."""

    parser = ArgumentParser(add_help=False, exit_on_error=False)
    parser.usage = "covinsight [options] [report...]"
    parser.description = (
        "Merge Clover and Cobertura coverage reports, compare them against "
        "a baseline and find uncovered lines added by a diff."
    )

    options = parser.add_argument_group("Options")
    options.add_argument(
        "-h", "--help", help="Show this help message, then exit.", action="help"
    )
    options.add_argument(
        "--version",
        help="Print the version number, then exit.",
        action="store_true",
        dest="version",
        default=False,
    )

    argument_parser_setup(parser, options)

    return parser


COPYRIGHT = "Copyright (c) 2024-2026 the covinsight authors\n"


def find_config_name(filename: str) -> Optional[str]:
    """Find the configuration to use."""
    if os.path.isfile(filename):
        return filename

    return None


def load_config(partial_options: Namespace) -> dict[str, Any]:
    """Load a config file if configured or found by default names"""
    filename = getattr(partial_options, "config", None)
    if filename is not None:
        if filename.endswith(".toml"):
            with open(filename, "rb") as buf:
                data = tomllib.load(buf)
            return parse_config_into_dict(config_entries_from_dict(data, filename))
        with open(filename, encoding="UTF-8") as buf:
            return parse_config_into_dict(parse_config_file(buf, filename))

    if filename := find_config_name("covinsight.cfg"):
        with open(filename, encoding="UTF-8") as buf:
            return parse_config_into_dict(parse_config_file(buf, filename))

    if filename := find_config_name("covinsight.toml"):
        with open(filename, "rb") as buf:
            data = tomllib.load(buf)
        return parse_config_into_dict(config_entries_from_dict(data, filename))

    if filename := find_config_name("pyproject.toml"):
        with open(filename, "rb") as buf:
            data = tomllib.load(buf)
        if (section := data.get("tool", {}).get("covinsight")) is not None:
            return parse_config_into_dict(config_entries_from_dict(section, filename))

    return {}


def read_reports(filenames: list[str], fmt: Optional[Format]) -> CoverageReport:
    """Read the reports of all flags and merge them."""
    reports = list[CoverageReport]()
    for filename in filenames:
        LOGGER.debug(f"Processing report: {filename}")
        with open(filename, "rb") as fh_in:
            reports.append(read_report(fh_in.read(), fmt))
    return merge(reports)


def main(args: Optional[list[str]] = None) -> int:  # pylint: disable=too-many-return-statements
    """The main entry point of covinsight."""
    configure_logging()
    try:
        parser = create_argument_parser()
        cli_options = parser.parse_args(args=args)
    except SystemExit as e:
        if e.code != 0:
            return EXIT_CMDLINE_ERROR
        return EXIT_SUCCESS
    except ArgumentError as e:
        sys.stderr.write(f"covinsight: error: {e}\n")
        return EXIT_CMDLINE_ERROR

    if cli_options.version:
        sys.stdout.write(f"covinsight {__version__}\n\n{COPYRIGHT}")
        return EXIT_SUCCESS

    # load the config
    try:
        cfg_options = load_config(cli_options)
    except (OSError, SyntaxError, ValueError) as e:
        LOGGER.error(f"Error reading the configuration: {e}")
        return EXIT_CMDLINE_ERROR
    options = merge_options_and_set_defaults([cfg_options, cli_options.__dict__])

    # Reconfigure the logging.
    update_logging(options)

    if not options.reports:
        LOGGER.error("at least one coverage report is required.")
        return EXIT_CMDLINE_ERROR

    if options.fail_on_uncovered and options.diff is None:
        LOGGER.error("--fail-on-uncovered need also option --diff.")
        return EXIT_CMDLINE_ERROR

    fmt = None if options.format is None else Format(options.format)

    LOGGER.info("Reading coverage data...")
    try:
        head = read_reports(options.reports, fmt)
        base: Optional[CoverageReport] = None
        if options.base:
            head, base = normalize_reports(
                [head, read_reports(options.base, fmt)], options.strip_prefix
            )
        else:
            head = normalize_report(head, options.strip_prefix)
        added_lines = None
        if options.diff is not None:
            with open(options.diff, encoding="utf-8", errors="replace") as fh_in:
                added_lines = parse_unified_diff(fh_in.read())
    except (CovinsightError, OSError) as e:
        LOGGER.error(f"Error occurred while reading reports: {e}")
        return EXIT_READ_ERROR

    comparison = compare(
        head, base, head_sha=options.head_sha, base_sha=options.base_sha
    )
    findings = None
    patch = None
    if added_lines is not None:
        findings = correlate(head, added_lines)
        patch = patch_coverage(head, added_lines)

    LOGGER.info("Writing coverage result...")
    try:
        write_report(
            build_document(head, comparison, findings, patch),
            options.json,
            options.json_pretty,
        )
    except OSError as e:
        LOGGER.error(f"Error occurred while writing the result: {e}")
        return EXIT_WRITE_ERROR

    return get_exit_code(head, findings, options.fail_under, options.fail_on_uncovered)


if __name__ == "__main__":
    sys.exit(main())
