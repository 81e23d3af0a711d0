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

import pytest

from covinsight.data_model.coverage import CoverageReport
from covinsight.data_model.stats import Metric
from covinsight.paths import (
    common_directory_prefix,
    normalize_paths,
    normalize_report,
    normalize_reports,
)

from conftest import file_coverage, report_of


@pytest.mark.parametrize(
    "paths,expected",
    [
        ([], ""),
        (["/ci/build/A.php"], "/ci/build/"),
        (["/ci/build/src/A.php", "/ci/build/src/B.php"], "/ci/build/src/"),
        (["/ci/build/src/A.php", "/ci/build/tests/B.php"], "/ci/build/"),
        (["/ci/src-a/A.php", "/ci/src-b/B.php"], "/ci/"),
        (["/ci/src/A.php", "/ci/src/deep/B.php"], "/ci/src/"),
        (["C:\\ci\\src\\A.php", "C:\\ci\\src\\B.php"], "C:/ci/src/"),
        (["src/A.php", "lib/B.php"], ""),
        (["A.php", "B.php"], ""),
    ],
)
def test_common_directory_prefix(paths: list[str], expected: str) -> None:
    assert common_directory_prefix(paths) == expected


def test_automatic_prefix() -> None:
    files = [
        file_coverage("/ci/build/src/A.php", 2, 1),
        file_coverage("/ci/build/tests/B.php", 3, 3),
    ]
    normalized = normalize_paths(files)
    assert [filecov.path for filecov in normalized] == ["src/A.php", "tests/B.php"]
    # only the path is changed
    assert normalized[0].statements == Metric(2, 1)
    assert normalized[1].statements == Metric(3, 3)


def test_single_file_is_unchanged() -> None:
    files = [file_coverage("/ci/build/src/A.php", 2, 1)]
    assert normalize_paths(files) == files


def test_without_common_prefix() -> None:
    files = [file_coverage("src/A.php", 2, 1), file_coverage("lib/B.php", 2, 1)]
    assert normalize_paths(files) == files


@pytest.mark.parametrize(
    "prefix", ["/ci/build", "/ci/build/"], ids=["without-slash", "with-slash"]
)
def test_explicit_prefix(prefix: str) -> None:
    files = [
        file_coverage("/ci/build/src/A.php", 1, 1),
        file_coverage("/ci/buildx/B.php", 1, 1),
        file_coverage("/elsewhere/C.php", 1, 1),
    ]
    assert [filecov.path for filecov in normalize_paths(files, prefix)] == [
        "src/A.php",
        "/ci/buildx/B.php",
        "/elsewhere/C.php",
    ]


def test_windows_prefix() -> None:
    files = [file_coverage("C:\\ci\\build\\src\\A.php", 1, 0)]
    (filecov,) = normalize_paths(files, "C:\\ci\\build")
    assert filecov.path == "src/A.php"


def test_duplicate_paths(caplog: pytest.LogCaptureFixture) -> None:
    files = [
        file_coverage("/a/src/A.php", 1, 1),
        file_coverage("src/A.php", 1, 0),
    ]
    normalize_paths(files, "/a")
    assert "Path 'src/A.php' is used by more than one file." in caplog.text


def test_normalize_report_keeps_summary() -> None:
    report = report_of(
        file_coverage("/ci/build/src/A.php", 4, 1),
        file_coverage("/ci/build/src/B.php", 6, 6),
    )
    normalized = normalize_report(report)
    assert normalized.summary == report.summary
    assert [filecov.path for filecov in normalized.files] == ["A.php", "B.php"]


def test_empty_report() -> None:
    assert normalize_report(CoverageReport.new_empty()) == CoverageReport.new_empty()


def test_reports_share_one_prefix() -> None:
    head = report_of(
        file_coverage("/ci/build/src/A.php", 1, 1),
        file_coverage("/ci/build/src/B.php", 1, 1),
    )
    base = report_of(
        file_coverage("/ci/build/src/A.php", 1, 1),
        file_coverage("/ci/build/tests/T.php", 1, 1),
    )
    head, base = normalize_reports([head, base])
    assert [filecov.path for filecov in head.files] == ["src/A.php", "src/B.php"]
    assert [filecov.path for filecov in base.files] == ["src/A.php", "tests/T.php"]


def test_reports_with_explicit_prefix() -> None:
    reports = [
        report_of(file_coverage("/a/src/A.php", 1, 1)),
        report_of(file_coverage("/b/src/A.php", 1, 1)),
    ]
    normalized = normalize_reports(reports, "/a")
    assert [filecov.path for filecov in normalized[0].files] == ["src/A.php"]
    assert [filecov.path for filecov in normalized[1].files] == ["/b/src/A.php"]


def test_reports_with_a_single_path() -> None:
    reports = [report_of(file_coverage("/ci/A.php", 1, 1)), CoverageReport.new_empty()]
    assert normalize_reports(reports) == reports
