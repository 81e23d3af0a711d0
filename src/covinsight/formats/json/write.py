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

from typing import Any, Optional

from ...data_model.comparison import ComparisonResult
from ...data_model.coverage import CoverageReport
from ...data_model.stats import Metric
from ...diff import Finding
from ...utils import write_json_output

FORMAT_VERSION = (
    # BEGIN format version
    "0.2"
    # END format version
)
KEY_FORMAT_VERSION = "covinsight/format_version"


def build_document(
    report: CoverageReport,
    comparison: Optional[ComparisonResult] = None,
    findings: Optional[list[Finding]] = None,
    patch: Optional[Metric] = None,
) -> dict[str, Any]:
    """Get the DTO handed to the caller, parts not computed are None."""
    return {
        KEY_FORMAT_VERSION: FORMAT_VERSION,
        "report": report.serialize(),
        "comparison": None if comparison is None else comparison.serialize(),
        "findings": (
            None if findings is None else [finding.serialize() for finding in findings]
        ),
        "patch_coverage": None if patch is None else patch.serialize(),
    }


def write_report(
    document: dict[str, Any], output_file: Optional[str], pretty: bool
) -> None:
    """Produce the JSON result document."""
    write_json_output(
        document,
        pretty=pretty,
        filename=output_file,
        default_filename="covinsight.json",
    )
