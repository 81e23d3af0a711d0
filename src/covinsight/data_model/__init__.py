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

from .comparison import ComparisonResult, FileDiff
from .coverage import CoverageReport, FileCoverageBuilder, FileCoverageData, MethodDetail
from .stats import CoverageSummary, Metric, MetricDelta

__all__ = [
    "ComparisonResult",
    "CoverageReport",
    "CoverageSummary",
    "FileCoverageBuilder",
    "FileCoverageData",
    "FileDiff",
    "MethodDetail",
    "Metric",
    "MetricDelta",
]
