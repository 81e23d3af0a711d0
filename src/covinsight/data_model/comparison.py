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
from dataclasses import dataclass, field
from typing import Any, Optional

from .stats import MetricDelta


@dataclass(frozen=True)
class FileDiff:
    """Coverage of one path in head and base."""

    path: str
    head_coverage: Optional[float]
    base_coverage: Optional[float]
    is_new: bool = False
    is_removed: bool = False

    @property
    def diff(self) -> float:
        """Head minus base, a missing side counts as 0.0.

        >>> FileDiff("a.php", 75.0, None, is_new=True).diff
        75.0
        """
        return (self.head_coverage or 0.0) - (self.base_coverage or 0.0)

    def serialize(self) -> dict[str, Any]:
        """Serialize the object."""
        return {
            "path": self.path,
            "head_coverage": self.head_coverage,
            "base_coverage": self.base_coverage,
            "diff": self.diff,
            "is_new": self.is_new,
            "is_removed": self.is_removed,
        }


def _sorted_diffs(diffs: frozenset[FileDiff]) -> list[dict[str, Any]]:
    return [filediff.serialize() for filediff in sorted(diffs, key=lambda d: d.path)]


@dataclass(frozen=True)
class ComparisonResult:
    """Structured difference between a head and a base report."""

    head_sha: Optional[str]
    base_sha: Optional[str]
    head_coverage: float
    base_coverage: Optional[float]
    coverage_diff: float = 0.0
    statements_diff: MetricDelta = MetricDelta(0, 0)
    methods_diff: MetricDelta = MetricDelta(0, 0)
    branches_diff: MetricDelta = MetricDelta(0, 0)
    new_files: frozenset[FileDiff] = field(default_factory=frozenset)
    removed_files: frozenset[FileDiff] = field(default_factory=frozenset)
    decreased_files: frozenset[FileDiff] = field(default_factory=frozenset)
    increased_files: frozenset[FileDiff] = field(default_factory=frozenset)

    @property
    def has_baseline(self) -> bool:
        """False if the head was compared against nothing."""
        return self.base_coverage is not None

    def serialize(self) -> dict[str, Any]:
        """Serialize the object."""
        return {
            "head_sha": self.head_sha,
            "base_sha": self.base_sha,
            "has_baseline": self.has_baseline,
            "head_coverage": self.head_coverage,
            "base_coverage": self.base_coverage,
            "coverage_diff": self.coverage_diff,
            "statements_diff": self.statements_diff.serialize(),
            "methods_diff": self.methods_diff.serialize(),
            "branches_diff": self.branches_diff.serialize(),
            "new_files": _sorted_diffs(self.new_files),
            "removed_files": _sorted_diffs(self.removed_files),
            "decreased_files": _sorted_diffs(self.decreased_files),
            "increased_files": _sorted_diffs(self.increased_files),
        }
