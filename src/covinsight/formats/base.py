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
import math
from typing import Iterable, Optional

from lxml import etree  # nosec # Entity resolution and network access are disabled below

from ..data_model.coverage import CoverageReport
from ..data_model.stats import Metric
from ..exceptions import CoverageParseError

LOGGER = logging.getLogger("covinsight")

# Highest line number accepted in a report.
MAX_LINE_NUMBER = 1_000_000
# The dense line coverage of all files together may not exceed
# MAX_LINE_NUMBER plus this many entries per byte of input.
LINES_PER_INPUT_BYTE = 16


class BaseHandler:
    """Base class for a format handler."""

    name = "XML"

    def read_report(self, content: bytes) -> CoverageReport:
        """Read a report in the format of the handler"""
        raise AssertionError("Function 'read_report' not implemented.")


def parse_xml(content: bytes, dialect: str) -> etree._Element:
    """Parse untrusted XML and return the root element.

    Entities are never expanded: a document declaring or referencing one is
    rejected, as is a document which isn't well formed.
    """
    parser = etree.XMLParser(
        resolve_entities=False,
        load_dtd=False,
        no_network=True,
        huge_tree=False,
    )
    try:
        root: etree._Element = etree.fromstring(content, parser)  # nosec # See parser above
    except (etree.XMLSyntaxError, ValueError) as e:
        raise CoverageParseError(f"Malformed {dialect} XML: {e}") from None

    dtd = root.getroottree().docinfo.internalDTD
    if dtd is not None and any(True for _ in dtd.iterentities()):
        raise CoverageParseError(
            f"Entity declarations are not allowed in {dialect} reports."
        )
    for entity in root.iter(etree.Entity):
        raise CoverageParseError(
            f"Entity reference {entity.text} is not allowed in {dialect} reports (line {entity.sourceline})."
        )

    return root


def int_attribute(elem: etree._Element, name: str, default: int = 0) -> int:
    """Read a numeric attribute, anything unusable gives the default.

    Float values are truncated, coverage tools are not consistent here.
    """
    value = elem.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        pass

    try:
        number = float(value)
    except ValueError:
        number = math.nan
    if math.isnan(number) or math.isinf(number):
        LOGGER.warning(
            f"Ignoring non numeric attribute {name}={value!r} of <{elem.tag}> at line {elem.sourceline}."
        )
        return default
    return int(number)


def count_attribute(elem: etree._Element, name: str) -> int:
    """Read a hit count, negative counts are clamped to zero."""
    count = int_attribute(elem, name)
    if count < 0:
        LOGGER.warning(
            f"Negative {name}={count} of <{elem.tag}> at line {elem.sourceline} counted as 0."
        )
        count = 0
    return count


def line_number(elem: etree._Element, *names: str) -> int:
    """Read the line number of a line element, the first given attribute wins."""
    value: Optional[str] = None
    for name in names:
        if (value := elem.get(name)) is not None:
            break
    try:
        lineno = int(value or "")
    except ValueError:
        raise CoverageParseError(
            f"Attribute {' or '.join(names)!r} is required and must be an integer: "
            f"{etree.tostring(elem).decode().strip()}"
        ) from None
    if not 1 <= lineno <= MAX_LINE_NUMBER:
        raise CoverageParseError(
            f"Line numbers must be between 1 and {MAX_LINE_NUMBER}, "
            f"got {lineno} at line {elem.sourceline}."
        )
    return lineno


def check_line_budget(last_lines: Iterable[int], content: bytes, dialect: str) -> None:
    """Keep the dense line coverage of a report proportional to its size."""
    budget = MAX_LINE_NUMBER + LINES_PER_INPUT_BYTE * len(content)
    if (total := sum(last_lines)) > budget:
        raise CoverageParseError(
            f"The files of the {dialect} report span {total} lines, "
            f"more than {budget} for {len(content)} bytes of input."
        )


def metric_attributes(
    elem: Optional[etree._Element], total_name: str, covered_name: str
) -> Metric:
    """Create a metric from a pair of total and covered attributes."""
    if elem is None:
        return Metric.new_empty()

    total = max(0, int_attribute(elem, total_name))
    covered = int_attribute(elem, covered_name)
    if not 0 <= covered <= total:
        LOGGER.warning(
            f"Clamping {covered_name}={covered} to the range 0..{total} at line {elem.sourceline}."
        )
        covered = min(max(covered, 0), total)
    return Metric(total, covered)
