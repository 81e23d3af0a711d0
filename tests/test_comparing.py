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

import datetime

import pytest

from covinsight.comparing import UploadRecord, compare, find_base
from covinsight.data_model.comparison import FileDiff
from covinsight.data_model.stats import Metric, MetricDelta

from conftest import file_coverage, report_of


def test_compare_with_itself() -> None:
    report = report_of(file_coverage("a.php", 10, 8), file_coverage("b.php", 4, 1))
    result = compare(report, report, head_sha="abc", base_sha="abc")

    assert result.has_baseline
    assert result.coverage_diff == 0.0
    assert result.head_coverage == result.base_coverage == report.coverage_percentage
    assert result.new_files == frozenset()
    assert result.removed_files == frozenset()
    assert result.decreased_files == frozenset()
    assert result.increased_files == frozenset()
    assert result.statements_diff == MetricDelta(0, 0)
    assert result.methods_diff == MetricDelta(0, 0)
    assert result.branches_diff == MetricDelta(0, 0)


def test_classification() -> None:
    head = report_of(
        file_coverage("a.php", 10, 8),
        file_coverage("b.php", 10, 5),
        file_coverage("c.php", 4, 4),
        file_coverage("e.php", 2, 1),
    )
    base = report_of(
        file_coverage("a.php", 10, 6),
        file_coverage("b.php", 8, 6),
        file_coverage("d.php", 2, 1),
        file_coverage("e.php", 4, 2),
    )
    result = compare(head, base, head_sha="head", base_sha="base")

    assert result.head_sha == "head"
    assert result.base_sha == "base"
    assert result.new_files == {FileDiff("c.php", 100.0, None, is_new=True)}
    assert result.removed_files == {FileDiff("d.php", None, 50.0, is_removed=True)}
    assert result.increased_files == {FileDiff("a.php", 80.0, 60.0)}
    assert result.decreased_files == {FileDiff("b.php", 50.0, 75.0)}
    # e.php has the same coverage and is in none of the sets

    # only files on both sides count
    assert result.statements_diff == (
        MetricDelta(0, 2) + MetricDelta(2, -1) + MetricDelta(-2, -1)
    )
    assert result.head_coverage == pytest.approx(18 / 26 * 100)
    assert result.base_coverage == pytest.approx(15 / 24 * 100)
    assert result.coverage_diff == pytest.approx(18 / 26 * 100 - 15 / 24 * 100)


def test_new_and_removed_files_are_exclusive() -> None:
    head = report_of(file_coverage("new.php", 2, 0))
    base = report_of(file_coverage("old.php", 2, 2))
    result = compare(head, base)

    assert {d.path for d in result.new_files} == {"new.php"}
    assert {d.path for d in result.removed_files} == {"old.php"}
    assert not result.increased_files
    assert not result.decreased_files


def test_percentages_are_rounded() -> None:
    head = report_of(file_coverage("a.php", 100000, 33333))
    base = report_of(file_coverage("a.php", 3, 1))
    result = compare(head, base)
    assert not result.decreased_files
    assert not result.increased_files

    head = report_of(file_coverage("a.php", 10000, 3333))
    base = report_of(file_coverage("a.php", 10000, 3334))
    assert {d.path for d in compare(head, base).decreased_files} == {"a.php"}


def test_metric_deltas() -> None:
    head = report_of(
        file_coverage("a.php", 10, 8, methods=Metric(3, 2), branches=Metric(4, 4))
    )
    base = report_of(
        file_coverage("a.php", 12, 8, methods=Metric(2, 2), branches=Metric(4, 1))
    )
    result = compare(head, base)
    assert result.statements_diff == MetricDelta(-2, 0)
    assert result.methods_diff == MetricDelta(1, 0)
    assert result.branches_diff == MetricDelta(0, 3)


def test_without_base() -> None:
    head = report_of(file_coverage("a.php", 4, 3))
    result = compare(head, head_sha="abc")

    assert not result.has_baseline
    assert result.head_sha == "abc"
    assert result.base_sha is None
    assert result.head_coverage == 75.0
    assert result.base_coverage is None
    assert result.coverage_diff == 0.0
    assert not result.new_files
    assert not result.removed_files

    data = result.serialize()
    assert data["has_baseline"] is False
    assert data["base_coverage"] is None
    assert data["new_files"] == []


def test_serialize_is_sorted() -> None:
    head = report_of(file_coverage("z.php", 1, 1), file_coverage("a.php", 1, 1))
    result = compare(head, report_of())
    data = result.serialize()
    assert [d["path"] for d in data["new_files"]] == ["a.php", "z.php"]
    assert data["new_files"][0] == {
        "path": "a.php",
        "head_coverage": 100.0,
        "base_coverage": None,
        "diff": 100.0,
        "is_new": True,
        "is_removed": False,
    }


def _at(hour: int) -> datetime.datetime:
    return datetime.datetime(2024, 5, 1, hour, tzinfo=datetime.timezone.utc)


UPLOADS = [
    UploadRecord("p1", branch="feature", finalized_at=_at(1)),
    UploadRecord("m1", branch="main", finalized_at=_at(2)),
    UploadRecord("m2", branch="main", finalized_at=_at(4)),
    UploadRecord("m3", branch="main"),
    UploadRecord("d1", branch="develop", finalized_at=_at(3)),
    UploadRecord("head", branch="feature", parent_sha="p1", finalized_at=_at(5)),
]


def test_find_base_parent_commit() -> None:
    base = find_base(
        UPLOADS,
        base_sha="p1",
        target_branch="develop",
        default_branch="main",
        exclude_sha="head",
    )
    assert base is not None
    assert base.commit_sha == "p1"


def test_find_base_recorded_parent() -> None:
    uploads = [
        UploadRecord("c2", branch="x", parent_sha="c1", finalized_at=_at(1)),
        UploadRecord("c3", branch="main", finalized_at=_at(2)),
    ]
    base = find_base(uploads, base_sha="c1", default_branch="main")
    assert base is not None
    assert base.commit_sha == "c2"


def test_find_base_commit_before_parent_link() -> None:
    uploads = [
        UploadRecord("c2", parent_sha="c1", finalized_at=_at(2)),
        UploadRecord("c1", finalized_at=_at(1)),
    ]
    base = find_base(uploads, base_sha="c1")
    assert base is not None
    assert base.commit_sha == "c1"

    # unfinalized uploads never qualify
    assert find_base([UploadRecord("c2", parent_sha="c1")], base_sha="c1") is None


def test_find_base_target_branch() -> None:
    base = find_base(
        UPLOADS,
        base_sha="unknown",
        target_branch="develop",
        default_branch="main",
        exclude_sha="head",
    )
    assert base is not None
    assert base.commit_sha == "d1"


def test_find_base_default_branch() -> None:
    # m3 is more recent but not finalized
    base = find_base(UPLOADS, target_branch="release", default_branch="main")
    assert base is not None
    assert base.commit_sha == "m2"


def test_find_base_excludes_head() -> None:
    assert (
        find_base(UPLOADS, target_branch="feature", exclude_sha="head").commit_sha
        == "p1"
    )
    assert find_base(UPLOADS[-1:], target_branch="feature", exclude_sha="head") is None


def test_find_base_nothing() -> None:
    assert find_base([]) is None
    assert find_base(UPLOADS, target_branch="release") is None
    assert find_base([UploadRecord("m3", branch="main")], default_branch="main") is None


def test_upload_record() -> None:
    report = report_of(file_coverage("a.php", 1, 1))
    upload = UploadRecord("abc", report=report)
    assert not upload.is_finalized
    # the report is not part of the identity
    assert upload == UploadRecord("abc")
