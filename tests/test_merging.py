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

from covinsight.data_model.coverage import CoverageReport
from covinsight.data_model.stats import Metric
from covinsight.merging import merge

from conftest import file_coverage, report_of


def test_single_report() -> None:
    report = report_of(file_coverage("a.php", 10, 8), file_coverage("b.php", 4, 1))
    assert merge([report]) == report


def test_no_reports() -> None:
    assert merge([]) == CoverageReport.new_empty()


def test_disjoint_reports() -> None:
    unit = report_of(file_coverage("a.php", 10, 8), file_coverage("b.php", 4, 1))
    integration = report_of(file_coverage("c.php", 2, 2))

    merged = merge([unit, integration])
    assert len(merged) == len(unit) + len(integration)
    assert merged.summary.total_files == 3
    assert merged.summary.statements == Metric(16, 11)


def test_best_file_wins() -> None:
    unit = report_of(file_coverage("a.php", 10, 5), file_coverage("b.php", 4, 4))
    integration = report_of(file_coverage("a.php", 10, 9), file_coverage("b.php", 4, 1))

    merged = merge([unit, integration]).by_path()
    assert merged["a.php"].statements == Metric(10, 9)
    assert merged["b.php"].statements == Metric(4, 4)


def test_lines_are_not_merged() -> None:
    unit = report_of(file_coverage("a.php", 2, 1, line_coverage=(1, 0)))
    integration = report_of(file_coverage("a.php", 2, 0, line_coverage=(0, 0)))

    (filecov,) = merge([unit, integration]).files
    assert filecov.line_coverage == (1, 0)


def test_tie_keeps_first_report() -> None:
    first = report_of(file_coverage("a.php", 4, 2, complexity=1))
    second = report_of(file_coverage("a.php", 2, 1, complexity=7))

    (filecov,) = merge([first, second]).files
    assert filecov.complexity == 1
    (filecov,) = merge([second, first]).files
    assert filecov.complexity == 7


def test_summary_is_recomputed() -> None:
    first = report_of(file_coverage("a.php", 4, 0))
    second = report_of(file_coverage("a.php", 4, 4))

    merged = merge([first, second])
    assert merged.summary.statements == Metric(4, 4)
    assert merged.summary.total_files == 1
    assert merged.coverage_percentage == 100.0


def test_deterministic() -> None:
    reports = [
        report_of(file_coverage("a.php", 3, 1), file_coverage("b.php", 3, 2)),
        report_of(file_coverage("b.php", 3, 3), file_coverage("c.php", 1, 0)),
    ]
    assert merge(reports) == merge(reports)
    assert merge(iter(reports)) == merge(reports)
