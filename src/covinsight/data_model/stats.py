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
from typing import TYPE_CHECKING, Any, Iterable

from ..exceptions import CoverageDataError

if TYPE_CHECKING:
    from .coverage import FileCoverageData


@dataclass(frozen=True)
class Metric:
    """A single coverage metric, e.g. the statements of a file."""

    total: int
    """How many elements there are."""

    covered: int
    """How many elements were covered."""

    def __post_init__(self) -> None:
        if self.total < 0:
            raise CoverageDataError(f"Total must not be negative, got {self.total}.")
        if not 0 <= self.covered <= self.total:
            raise CoverageDataError(
                f"Covered must be between 0 and {self.total}, got {self.covered}."
            )

    @staticmethod
    def new_empty() -> Metric:
        """Create a empty coverage metric."""
        return Metric(0, 0)

    @property
    def percentage(self) -> float:
        """Percentage of covered elements.

        >>> Metric(10, 8).percentage
        80.0

        A metric without elements is vacuous, not failing:
        >>> Metric(0, 0).percentage
        0.0
        """
        if not self.total:
            return 0.0
        return self.covered / self.total * 100

    def __add__(self, other: Metric) -> Metric:
        return Metric(self.total + other.total, self.covered + other.covered)

    def __sub__(self, other: Metric) -> MetricDelta:
        return MetricDelta(self.total - other.total, self.covered - other.covered)

    def serialize(self) -> dict[str, Any]:
        """Serialize the object."""
        return {
            "total": self.total,
            "covered": self.covered,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class MetricDelta:
    """Difference between two metrics, head minus base."""

    total: int
    covered: int

    @staticmethod
    def new_empty() -> MetricDelta:
        """Create a delta without any change."""
        return MetricDelta(0, 0)

    def __add__(self, other: MetricDelta) -> MetricDelta:
        return MetricDelta(self.total + other.total, self.covered + other.covered)

    def serialize(self) -> dict[str, Any]:
        """Serialize the object."""
        return {"total": self.total, "covered": self.covered}


@dataclass(frozen=True)
class CoverageSummary:
    """Data class for the summarized coverage statistics."""

    statements: Metric
    methods: Metric
    branches: Metric
    lines: Metric
    total_files: int
    elements: Metric = Metric(0, 0)

    @staticmethod
    def new_empty() -> CoverageSummary:
        """Create a empty coverage summary."""
        return CoverageSummary(
            statements=Metric.new_empty(),
            methods=Metric.new_empty(),
            branches=Metric.new_empty(),
            lines=Metric.new_empty(),
            total_files=0,
            elements=Metric.new_empty(),
        )

    @staticmethod
    def from_files(files: Iterable[FileCoverageData]) -> CoverageSummary:
        """Sum up the metrics of the given files."""
        statements = Metric.new_empty()
        methods = Metric.new_empty()
        branches = Metric.new_empty()
        lines = Metric.new_empty()
        elements = Metric.new_empty()
        total_files = 0
        for filecov in files:
            statements += filecov.statements
            methods += filecov.methods
            branches += filecov.branches
            lines += filecov.lines
            elements += filecov.elements
            total_files += 1

        return CoverageSummary(
            statements=statements,
            methods=methods,
            branches=branches,
            lines=lines,
            total_files=total_files,
            elements=elements,
        )

    def serialize(self) -> dict[str, Any]:
        """Serialize the object."""
        return {
            "statements": self.statements.serialize(),
            "methods": self.methods.serialize(),
            "branches": self.branches.serialize(),
            "lines": self.lines.serialize(),
            "elements": self.elements.serialize(),
            "total_files": self.total_files,
        }
