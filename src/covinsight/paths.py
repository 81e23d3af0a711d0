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

import logging
from typing import Optional, Sequence

from .data_model.coverage import CoverageReport, FileCoverageData
from .utils import force_unix_separator

LOGGER = logging.getLogger("covinsight")


def common_directory_prefix(paths: Sequence[str]) -> str:
    """Get the longest common directory prefix, compared segment by segment.

    The returned prefix always ends with a slash, or is empty.

    >>> common_directory_prefix(["/ci/build/src/A.php", "/ci/build/tests/B.php"])
    '/ci/build/'
    >>> common_directory_prefix(["/ci/src-a/A.php", "/ci/src-b/B.php"])
    '/ci/'
    >>> common_directory_prefix(["A.php", "src/B.php"])
    ''
    """
    if not paths:
        return ""

    directories = [force_unix_separator(path).split("/")[:-1] for path in paths]
    # The common prefix of the lexicographic minimum and maximum
    # is also the common prefix of all the others.
    min_dirs = min(directories)
    max_dirs = max(directories)
    common = min_dirs
    for i, segment in enumerate(min_dirs):
        if i >= len(max_dirs) or segment != max_dirs[i]:
            common = min_dirs[:i]
            break

    if not common:
        return ""
    return "/".join(common) + "/"


def _strip_prefix(path: str, prefix: str) -> Optional[str]:
    unix_path = force_unix_separator(path)
    if not unix_path.startswith(prefix):
        return None
    rest = unix_path[len(prefix) :]
    # Never cut a path segment in the middle.
    if rest and not prefix.endswith("/") and not rest.startswith("/"):
        return None
    return rest.lstrip("/")


def normalize_paths(
    files: Sequence[FileCoverageData], prefix: Optional[str] = None
) -> list[FileCoverageData]:
    """Rewrite CI specific paths into repository relative paths.

    With an explicit prefix, it is stripped from every path starting with it.
    Without one, the common directory of all paths is stripped.
    Only the paths are changed.
    """
    if prefix is None:
        if len(files) < 2:
            return list(files)
        prefix = common_directory_prefix([filecov.path for filecov in files])
        if not prefix:
            LOGGER.debug("No common directory prefix found.")
            return list(files)
        LOGGER.debug(f"Common directory prefix is {prefix!r}")
    else:
        prefix = force_unix_separator(prefix)

    if not prefix:
        return list(files)

    normalized = list[FileCoverageData]()
    for filecov in files:
        new_path = _strip_prefix(filecov.path, prefix)
        if new_path is None or new_path == filecov.path:
            normalized.append(filecov)
        else:
            normalized.append(filecov.with_path(new_path))

    seen = set[str]()
    for filecov in normalized:
        if filecov.path in seen:
            LOGGER.warning(f"Path {filecov.path!r} is used by more than one file.")
        seen.add(filecov.path)

    return normalized


def normalize_report(
    report: CoverageReport, prefix: Optional[str] = None
) -> CoverageReport:
    """Normalize the paths of all files in a report, the summary is kept."""
    return CoverageReport(
        summary=report.summary, files=tuple(normalize_paths(report.files, prefix))
    )


def normalize_reports(
    reports: Sequence[CoverageReport], prefix: Optional[str] = None
) -> list[CoverageReport]:
    """Normalize several reports which must end up with comparable paths.

    Without a prefix, the common directory of the paths of all reports
    together is stripped from each of them.
    """
    if prefix is None:
        paths = sorted({filecov.path for report in reports for filecov in report.files})
        if len(paths) < 2:
            return list(reports)
        prefix = common_directory_prefix(paths)
        LOGGER.debug(f"Common directory prefix of {len(reports)} reports is {prefix!r}")
    return [normalize_report(report, prefix) for report in reports]
