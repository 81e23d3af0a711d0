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
import datetime
import logging
from typing import Iterable, Optional

from .data_model.comparison import ComparisonResult, FileDiff
from .data_model.coverage import CoverageReport
from .data_model.stats import MetricDelta

LOGGER = logging.getLogger("covinsight")

# Percentages are classified on this many decimals, a fixed representation
# gives the same result on every platform.
PERCENTAGE_DECIMALS = 2


@dataclass(frozen=True)
class UploadRecord:
    """What the caller knows about an earlier upload of coverage data."""

    commit_sha: str
    branch: Optional[str] = None
    parent_sha: Optional[str] = None
    finalized_at: Optional[datetime.datetime] = None
    report: Optional[CoverageReport] = field(default=None, compare=False, repr=False)

    @property
    def is_finalized(self) -> bool:
        """True if all expected flags of the commit were received."""
        return self.finalized_at is not None


def _most_recent(uploads: Iterable[UploadRecord]) -> Optional[UploadRecord]:
    most_recent: Optional[UploadRecord] = None
    for upload in uploads:
        if most_recent is None or (
            upload.finalized_at is not None
            and most_recent.finalized_at is not None
            and upload.finalized_at > most_recent.finalized_at
        ):
            most_recent = upload
    return most_recent


def find_base(
    uploads: Iterable[UploadRecord],
    *,
    base_sha: Optional[str] = None,
    target_branch: Optional[str] = None,
    default_branch: Optional[str] = None,
    exclude_sha: Optional[str] = None,
) -> Optional[UploadRecord]:
    """Select the upload to compare a head against.

    The first rule that matches wins:

    1. the finalized upload of the commit ``base_sha`` itself,
    2. the finalized upload whose recorded ``parent_sha`` is ``base_sha``,
    3. the most recently finalized upload on ``target_branch``,
    4. the most recently finalized upload on ``default_branch``.

    Returns None if there is no baseline, uploads of ``exclude_sha``
    (the head itself) are never selected.
    """
    candidates = [
        upload
        for upload in uploads
        if upload.is_finalized and upload.commit_sha != exclude_sha
    ]

    if base_sha is not None:
        if (
            upload := _most_recent(u for u in candidates if u.commit_sha == base_sha)
        ) is not None:
            LOGGER.debug(f"Using upload of commit {base_sha} as baseline.")
            return upload
        if (
            upload := _most_recent(u for u in candidates if u.parent_sha == base_sha)
        ) is not None:
            LOGGER.debug(
                f"Using upload {upload.commit_sha} with parent {base_sha} as baseline."
            )
            return upload

    for branch, description in (
        (target_branch, "target branch"),
        (default_branch, "default branch"),
    ):
        if branch is None:
            continue
        if (
            upload := _most_recent(u for u in candidates if u.branch == branch)
        ) is not None:
            LOGGER.debug(
                f"Using latest upload {upload.commit_sha} on {description} {branch!r} as baseline."
            )
            return upload

    LOGGER.debug("No baseline found.")
    return None


def _comparable(percentage: float) -> float:
    return round(percentage, PERCENTAGE_DECIMALS)


def compare(
    head: CoverageReport,
    base: Optional[CoverageReport] = None,
    *,
    head_sha: Optional[str] = None,
    base_sha: Optional[str] = None,
) -> ComparisonResult:
    """Compare the head report against the base report.

    Without a base only the head coverage is reported. Otherwise every path is
    classified as new, removed, decreased or increased, paths with the same
    coverage on both sides are in none of these sets. The metric deltas are
    summed over the paths present on both sides.
    """
    if base is None:
        LOGGER.debug("No baseline available, reporting the head coverage only.")
        return ComparisonResult(
            head_sha=head_sha,
            base_sha=None,
            head_coverage=head.coverage_percentage,
            base_coverage=None,
        )

    head_files = head.by_path()
    base_files = base.by_path()

    new_files = set[FileDiff]()
    removed_files = set[FileDiff]()
    decreased_files = set[FileDiff]()
    increased_files = set[FileDiff]()
    statements_diff = MetricDelta.new_empty()
    methods_diff = MetricDelta.new_empty()
    branches_diff = MetricDelta.new_empty()

    for path, head_file in head_files.items():
        base_file = base_files.get(path)
        if base_file is None:
            new_files.add(
                FileDiff(path, head_file.coverage_percentage, None, is_new=True)
            )
            continue

        statements_diff += head_file.statements - base_file.statements
        methods_diff += head_file.methods - base_file.methods
        branches_diff += head_file.branches - base_file.branches

        filediff = FileDiff(
            path, head_file.coverage_percentage, base_file.coverage_percentage
        )
        head_percentage = _comparable(head_file.coverage_percentage)
        base_percentage = _comparable(base_file.coverage_percentage)
        if head_percentage < base_percentage:
            decreased_files.add(filediff)
        elif head_percentage > base_percentage:
            increased_files.add(filediff)

    for path, base_file in base_files.items():
        if path not in head_files:
            removed_files.add(
                FileDiff(path, None, base_file.coverage_percentage, is_removed=True)
            )

    LOGGER.debug(
        f"Compared {len(head_files)} head files against {len(base_files)} base files: "
        f"{len(new_files)} new, {len(removed_files)} removed, "
        f"{len(decreased_files)} decreased, {len(increased_files)} increased."
    )

    return ComparisonResult(
        head_sha=head_sha,
        base_sha=base_sha,
        head_coverage=head.coverage_percentage,
        base_coverage=base.coverage_percentage,
        coverage_diff=head.coverage_percentage - base.coverage_percentage,
        statements_diff=statements_diff,
        methods_diff=methods_diff,
        branches_diff=branches_diff,
        new_files=frozenset(new_files),
        removed_files=frozenset(removed_files),
        decreased_files=frozenset(decreased_files),
        increased_files=frozenset(increased_files),
    )
