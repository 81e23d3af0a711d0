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

"""
Merge the reports of several test suite runs (flags) of one commit.

Files are never merged line by line. Each path is represented by the single
occurrence with the best statement coverage, on a tie the first one seen wins.
The summary is computed again from the selected files.
"""

import logging
from typing import Iterable

from .data_model.coverage import CoverageReport, FileCoverageData

LOGGER = logging.getLogger("covinsight")


def merge(reports: Iterable[CoverageReport]) -> CoverageReport:
    """Get the union of the given reports."""
    best = dict[str, FileCoverageData]()
    count = 0
    for count, report in enumerate(reports, 1):
        for filecov in report.files:
            current = best.get(filecov.path)
            if current is None:
                best[filecov.path] = filecov
            elif filecov.coverage_percentage > current.coverage_percentage:
                LOGGER.debug(
                    f"Use {filecov.path} of report {count}: "
                    f"{filecov.coverage_percentage}% > {current.coverage_percentage}%"
                )
                best[filecov.path] = filecov

    LOGGER.debug(f"Merged {count} reports into {len(best)} files.")
    return CoverageReport.from_files(best.values())
