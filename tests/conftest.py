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
from typing import Iterator

import pytest

from covinsight.data_model.coverage import CoverageReport, FileCoverageData
from covinsight.data_model.stats import Metric


@pytest.fixture(autouse=True)
def reset_logger_level() -> Iterator[None]:
    """The --verbose option changes the level of the covinsight logger."""
    logger = logging.getLogger("covinsight")
    level = logger.level
    yield
    logger.setLevel(level)


def file_coverage(path: str, total: int, covered: int, **kwargs) -> FileCoverageData:
    """Create a file with only a statement metric."""
    return FileCoverageData.new_empty(
        path, statements=Metric(total, covered), **kwargs
    )


def report_of(*files: FileCoverageData) -> CoverageReport:
    return CoverageReport.from_files(files)
