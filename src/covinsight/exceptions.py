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

"""Exceptions used in covinsight."""


class CovinsightError(RuntimeError):
    """Base class for errors surfaced to the caller of the engine."""


class UnrecognizedFormat(CovinsightError):
    """The content is not a coverage report dialect we know."""


class CoverageParseError(CovinsightError):
    """Malformed XML or a security sensitive construct in a report."""


class MalformedDiffInput(CovinsightError):
    """The unified diff text can't be split into files and hunks."""


class CoverageDataError(AssertionError):
    """Exception for inconsistent coverage data."""
