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

from covinsight.data_model.coverage import MethodDetail
from covinsight.data_model.stats import Metric
from covinsight.diff import (
    Finding,
    FindingKind,
    correlate,
    parse_unified_diff,
    patch_coverage,
)
from covinsight.exceptions import MalformedDiffInput

from conftest import file_coverage, report_of


GIT_DIFF = """\
diff --git a/src/A.php b/src/A.php
index 1111111..2222222 100644
--- a/src/A.php
+++ b/src/A.php
@@ -8,3 +8,6 @@ class A
 line8
 line9
+line10
+line11
+line12
 line13
diff --git a/old.php b/old.php
deleted file mode 100644
index 3333333..0000000
--- a/old.php
+++ /dev/null
@@ -1,2 +0,0 @@
-a
-b
diff --git a/new.php b/new.php
new file mode 100644
index 0000000..4444444
--- /dev/null
+++ b/new.php
@@ -0,0 +1,2 @@
+x
+y
"""


def test_parse_git_diff() -> None:
    assert parse_unified_diff(GIT_DIFF) == {
        "src/A.php": frozenset({10, 11, 12}),
        "new.php": frozenset({1, 2}),
    }


def test_parse_removed_lines_only() -> None:
    diff = """\
--- a/src/A.php
+++ b/src/A.php
@@ -1,3 +1,2 @@
 line1
-line2
 line3
"""
    assert parse_unified_diff(diff) == {"src/A.php": frozenset()}


def test_parse_empty_diff() -> None:
    assert parse_unified_diff("") == {}


@pytest.mark.parametrize(
    "text",
    ["this is not a diff\n", "@@ -1 +1 @@\n-a\n+b\n"],
    ids=["text", "hunk-without-file"],
)
def test_parse_garbage(text: str) -> None:
    with pytest.raises(MalformedDiffInput):
        parse_unified_diff(text)


def make_report():
    return report_of(
        file_coverage(
            "src/A.php",
            3,
            1,
            line_coverage=(None,) * 9 + (0, 3, None),
            method_detail=(
                MethodDetail("covered", 11, 3),
                MethodDetail("uncovered", 10, 0),
            ),
        ),
        file_coverage("src/B.php", 1, 0, line_coverage=(0,)),
    )


def test_uncovered_added_line() -> None:
    report = report_of(
        file_coverage("src/A.php", 2, 1, line_coverage=(None,) * 9 + (0, 3, None))
    )
    assert correlate(report, {"src/A.php": [10, 11, 12]}) == [Finding("src/A.php", 10)]


def test_uncovered_method() -> None:
    findings = correlate(make_report(), {"src/A.php": {12, 11, 10}})
    assert findings == [
        Finding("src/A.php", 10),
        Finding("src/A.php", 10, FindingKind.UNCOVERED_METHOD, "uncovered"),
    ]
    assert [finding.serialize() for finding in findings] == [
        {"path": "src/A.php", "line": 10, "kind": "uncovered_line"},
        {
            "path": "src/A.php",
            "line": 10,
            "kind": "uncovered_method",
            "method": "uncovered",
        },
    ]


def test_unknown_paths_and_lines_are_ignored() -> None:
    added = {"src/C.php": [1, 2], "src/B.php": [5], "src/A.php": [1, 100]}
    assert correlate(make_report(), added) == []


def test_no_added_lines() -> None:
    assert correlate(make_report(), {}) == []
    assert patch_coverage(make_report(), {}) == Metric(0, 0)


def test_patch_coverage() -> None:
    added = {"src/A.php": [10, 11, 12], "src/B.php": [1], "src/C.php": [1]}
    assert patch_coverage(make_report(), added) == Metric(3, 1)


def test_diff_and_report_together() -> None:
    findings = correlate(make_report(), parse_unified_diff(GIT_DIFF))
    assert [(finding.line, str(finding.kind)) for finding in findings] == [
        (10, "uncovered_line"),
        (10, "uncovered_method"),
    ]
