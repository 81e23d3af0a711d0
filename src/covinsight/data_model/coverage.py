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
The canonical coverage model shared by all readers.

The hierarchy is flat:

- CoverageReport
  - CoverageSummary: the summed metrics of all files
  - FileCoverageData: one entry per source path
    - Metric: statements, methods, branches, elements
    - MethodDetail: one entry per executable method
    - line coverage: dense tuple indexed by line number - 1

The readers fill a FileCoverageBuilder and freeze it with build().
Nothing in here is mutated after construction.
"""

from __future__ import annotations
import dataclasses
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

from ..exceptions import CoverageDataError
from .stats import CoverageSummary, Metric


LineCoverageType = tuple[Optional[int], ...]


@dataclass(frozen=True)
class MethodDetail:
    """Represent a single executable method of a file."""

    name: str
    start_line: int
    hits: int

    def __post_init__(self) -> None:
        if self.start_line < 1:
            raise CoverageDataError(
                f"Method {self.name!r} must start at line 1 or later, got {self.start_line}."
            )
        if self.hits < 0:
            raise CoverageDataError(
                f"Method {self.name!r} has a negative hit count {self.hits}."
            )

    def serialize(self) -> dict[str, Any]:
        """Serialize the object."""
        return {"name": self.name, "start_line": self.start_line, "hits": self.hits}


@dataclass(frozen=True)
class FileCoverageData:
    """Represent coverage information about a file."""

    path: str
    statements: Metric
    methods: Metric
    branches: Metric
    complexity: int = 0
    method_detail: tuple[MethodDetail, ...] = ()
    line_coverage: LineCoverageType = ()
    elements: Metric = Metric(0, 0)

    @property
    def lines(self) -> Metric:
        """The line metric derived from the dense line coverage."""
        executable = [count for count in self.line_coverage if count is not None]
        return Metric(len(executable), sum(1 for count in executable if count > 0))

    @property
    def coverage_percentage(self) -> float:
        """The statement coverage of this file."""
        return self.statements.percentage

    def hits(self, lineno: int) -> Optional[int]:
        """Get the hit count of a line, None if the line isn't executable.

        >>> filecov = FileCoverageData.new_empty("a.php", line_coverage=(None, 0, 3))
        >>> [filecov.hits(n) for n in (1, 2, 3, 4)]
        [None, 0, 3, None]
        """
        if 1 <= lineno <= len(self.line_coverage):
            return self.line_coverage[lineno - 1]
        return None

    def with_path(self, path: str) -> FileCoverageData:
        """Get a copy of this file with another path."""
        return dataclasses.replace(self, path=path)

    @staticmethod
    def new_empty(path: str, **kwargs: Any) -> FileCoverageData:
        """Create a file without any metric, mostly useful for tests."""
        return FileCoverageData(
            path=path,
            statements=kwargs.pop("statements", Metric.new_empty()),
            methods=kwargs.pop("methods", Metric.new_empty()),
            branches=kwargs.pop("branches", Metric.new_empty()),
            **kwargs,
        )

    @staticmethod
    def dense_line_coverage(
        hits: Mapping[int, int], last_line: int
    ) -> LineCoverageType:
        """Expand sparse line hits into a tuple of length last_line.

        >>> FileCoverageData.dense_line_coverage({2: 0, 4: 5}, 5)
        (None, 0, None, 5, None)
        """
        return tuple(hits.get(lineno) for lineno in range(1, last_line + 1))

    def serialize(self) -> dict[str, Any]:
        """Serialize the object."""
        return {
            "path": self.path,
            "statements": self.statements.serialize(),
            "methods": self.methods.serialize(),
            "branches": self.branches.serialize(),
            "elements": self.elements.serialize(),
            "lines": self.lines.serialize(),
            "complexity": self.complexity,
            "coverage_percentage": self.coverage_percentage,
            "method_detail": [method.serialize() for method in self.method_detail],
            "line_coverage": list(self.line_coverage),
        }


@dataclass(frozen=True)
class CoverageReport:
    """Coverage report holding all the coverage data of one upload."""

    summary: CoverageSummary
    files: tuple[FileCoverageData, ...] = ()

    @staticmethod
    def from_files(files: Iterable[FileCoverageData]) -> CoverageReport:
        """Create a report and compute the summary from the files."""
        files = tuple(files)
        return CoverageReport(summary=CoverageSummary.from_files(files), files=files)

    @staticmethod
    def new_empty() -> CoverageReport:
        """Create a report without any file."""
        return CoverageReport(summary=CoverageSummary.new_empty())

    @property
    def coverage_percentage(self) -> float:
        """The statement coverage of the whole report."""
        return self.summary.statements.percentage

    def __len__(self) -> int:
        return len(self.files)

    def __contains__(self, path: str) -> bool:
        return any(filecov.path == path for filecov in self.files)

    def by_path(self) -> dict[str, FileCoverageData]:
        """Index the files by their path."""
        return {filecov.path: filecov for filecov in self.files}

    def serialize(self) -> dict[str, Any]:
        """Serialize the object."""
        return {
            "coverage_percentage": self.coverage_percentage,
            "summary": self.summary.serialize(),
            "files": [filecov.serialize() for filecov in self.files],
        }


class FileCoverageBuilder:
    """Collect the data of one file while reading a report.

    The same path may be inserted several times (two Cobertura classes sharing
    a filename, a Clover file listed twice), the hits of a line are merged by
    taking the maximum. Metrics given with add_metrics() are summed, metrics
    never given are derived from the collected lines and methods.
    """

    __slots__ = (
        "path",
        "line_hits",
        "last_line",
        "branch_hits",
        "method_hits",
        "complexity",
        "_metrics",
    )

    def __init__(self, path: str) -> None:
        self.path = path
        self.line_hits = dict[int, int]()
        self.last_line = 0
        self.branch_hits = dict[int, Metric]()
        self.method_hits = dict[tuple[str, int], int]()
        self.complexity = 0
        self._metrics: Optional[dict[str, Metric]] = None

    def mention_line(self, lineno: int) -> None:
        """Extend the line range without marking the line executable."""
        self.last_line = max(self.last_line, lineno)

    def insert_line(self, lineno: int, count: int) -> None:
        """Add the hit count of an executable line."""
        self.mention_line(lineno)
        if lineno in self.line_hits:
            count = max(count, self.line_hits[lineno])
        self.line_hits[lineno] = count

    def insert_branch(self, lineno: int, branches: Metric) -> None:
        """Add the branch coverage of a line, the better one wins."""
        if (current := self.branch_hits.get(lineno)) is not None:
            branches = Metric(
                max(current.total, branches.total),
                min(
                    max(current.total, branches.total),
                    max(current.covered, branches.covered),
                ),
            )
        self.branch_hits[lineno] = branches

    def insert_method(self, name: str, start_line: int, hits: int) -> None:
        """Add a method, duplicates keep the maximum hit count."""
        key = (name, start_line)
        self.method_hits[key] = max(hits, self.method_hits.get(key, 0))

    def add_metrics(
        self,
        *,
        statements: Metric,
        methods: Metric,
        branches: Metric,
        elements: Metric,
        complexity: int,
    ) -> None:
        """Add metrics read from the report itself."""
        if self._metrics is None:
            self._metrics = {
                "statements": statements,
                "methods": methods,
                "branches": branches,
                "elements": elements,
            }
        else:
            self._metrics["statements"] += statements
            self._metrics["methods"] += methods
            self._metrics["branches"] += branches
            self._metrics["elements"] += elements
        self.complexity += complexity

    def build(self) -> FileCoverageData:
        """Freeze the collected data."""
        method_detail = tuple(
            MethodDetail(name, start_line, hits)
            for (name, start_line), hits in sorted(
                self.method_hits.items(), key=lambda item: (item[0][1], item[0][0])
            )
        )
        if self._metrics is not None:
            statements = self._metrics["statements"]
            methods = self._metrics["methods"]
            branches = self._metrics["branches"]
            elements = self._metrics["elements"]
        else:
            statements = Metric(
                len(self.line_hits),
                sum(1 for count in self.line_hits.values() if count > 0),
            )
            methods = Metric(
                len(method_detail),
                sum(1 for method in method_detail if method.hits > 0),
            )
            branches = sum(self.branch_hits.values(), Metric.new_empty())
            elements = statements + methods + branches

        return FileCoverageData(
            path=self.path,
            statements=statements,
            methods=methods,
            branches=branches,
            complexity=self.complexity,
            method_detail=method_detail,
            line_coverage=FileCoverageData.dense_line_coverage(
                self.line_hits, self.last_line
            ),
            elements=elements,
        )
