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

"""Parse, normalize, compare, merge and correlate coverage reports."""

from .comparing import UploadRecord, compare, find_base
from .data_model.comparison import ComparisonResult, FileDiff
from .data_model.coverage import CoverageReport, FileCoverageData, MethodDetail
from .data_model.stats import CoverageSummary, Metric, MetricDelta
from .diff import Finding, FindingKind, correlate, parse_unified_diff, patch_coverage
from .exceptions import (
    CoverageDataError,
    CoverageParseError,
    CovinsightError,
    MalformedDiffInput,
    UnrecognizedFormat,
)
from .formats import Format, detect, parse, read_report
from .merging import merge
from .paths import normalize_paths, normalize_report, normalize_reports
from .version import __version__

__all__ = [
    "ComparisonResult",
    "CoverageDataError",
    "CoverageParseError",
    "CoverageReport",
    "CoverageSummary",
    "CovinsightError",
    "FileCoverageData",
    "FileDiff",
    "Finding",
    "FindingKind",
    "Format",
    "MalformedDiffInput",
    "MethodDetail",
    "Metric",
    "MetricDelta",
    "UnrecognizedFormat",
    "UploadRecord",
    "__version__",
    "compare",
    "correlate",
    "detect",
    "find_base",
    "merge",
    "normalize_paths",
    "normalize_report",
    "normalize_reports",
    "parse",
    "parse_unified_diff",
    "patch_coverage",
    "read_report",
]
