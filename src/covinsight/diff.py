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

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
from typing import Any, Iterable, Mapping, Optional

from unidiff import PatchSet
from unidiff.errors import UnidiffParseError

from .data_model.coverage import CoverageReport
from .data_model.stats import Metric
from .exceptions import MalformedDiffInput

LOGGER = logging.getLogger("covinsight")

AddedLines = Mapping[str, Iterable[int]]


class FindingKind(str, Enum):
    """What kind of new code is not covered."""

    UNCOVERED_LINE = "uncovered_line"
    UNCOVERED_METHOD = "uncovered_method"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Finding:
    """Newly introduced code which is not covered by any test."""

    path: str
    line: int
    kind: FindingKind = FindingKind.UNCOVERED_LINE
    method: Optional[str] = None

    def serialize(self) -> dict[str, Any]:
        """Serialize the object."""
        data: dict[str, Any] = {
            "path": self.path,
            "line": self.line,
            "kind": str(self.kind),
        }
        if self.method is not None:
            data["method"] = self.method
        return data


def parse_unified_diff(text: str) -> dict[str, frozenset[int]]:
    """Get the added line numbers of each file in a unified diff.

    The numbers refer to the new version of the file. Deleted files are skipped.

    >>> diff = '''--- a/src/A.php
    ... +++ b/src/A.php
    ... @@ -1,2 +1,3 @@
    ...  <?php
    ... -echo 1;
    ... +echo 2;
    ... +echo 3;
    ... '''
    >>> sorted(parse_unified_diff(diff)["src/A.php"])
    [2, 3]
    """
    try:
        patch_set = PatchSet.from_string(text)
    except UnidiffParseError as e:
        raise MalformedDiffInput(f"Can't parse unified diff: {e}") from None

    if text.strip() and not patch_set:
        raise MalformedDiffInput("No file header found in unified diff.")

    added_lines = dict[str, frozenset[int]]()
    for patched_file in patch_set:
        if patched_file.is_removed_file:
            LOGGER.debug(f"Skip removed file {patched_file.path}")
            continue
        added = frozenset(
            line.target_line_no
            for hunk in patched_file
            for line in hunk
            if line.is_added and line.target_line_no is not None
        )
        LOGGER.debug(f"Found {len(added)} added lines in {patched_file.path}")
        added_lines[patched_file.path] = added_lines.get(
            patched_file.path, frozenset()
        ).union(added)

    return added_lines


def correlate(report: CoverageReport, added_lines: AddedLines) -> list[Finding]:
    """Find added lines and methods which are executable but never hit.

    Only the added lines are checked, lines without coverage information are
    never reported.
    """
    findings = list[Finding]()
    for filecov in report.files:
        if (lines := added_lines.get(filecov.path)) is None:
            continue
        added = set(lines)

        for lineno in sorted(added):
            if filecov.hits(lineno) == 0:
                findings.append(Finding(filecov.path, lineno))

        for method in filecov.method_detail:
            if method.start_line in added and method.hits == 0:
                findings.append(
                    Finding(
                        filecov.path,
                        method.start_line,
                        FindingKind.UNCOVERED_METHOD,
                        method.name,
                    )
                )

    LOGGER.debug(f"Found {len(findings)} uncovered new lines and methods.")
    return findings


def patch_coverage(report: CoverageReport, added_lines: AddedLines) -> Metric:
    """Get the coverage of the executable added lines."""
    total = 0
    covered = 0
    for filecov in report.files:
        for lineno in set(added_lines.get(filecov.path, ())):
            if (count := filecov.hits(lineno)) is not None:
                total += 1
                if count > 0:
                    covered += 1
    return Metric(total, covered)
