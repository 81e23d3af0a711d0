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
import re
from lxml import etree  # nosec # Only parsed through parse_xml

from ...data_model.coverage import CoverageReport, FileCoverageBuilder
from ...data_model.stats import Metric
from ..base import check_line_budget, count_attribute, line_number, parse_xml

LOGGER = logging.getLogger("covinsight")

# e.g. condition-coverage="50% (1/2)"
CONDITION_COVERAGE = re.compile(
    r"^\s*\d+(?:\.\d+)?\s*%\s*\(\s*(\d+)\s*/\s*(\d+)\s*\)\s*$"
)


def read_report(content: bytes) -> CoverageReport:
    """Read a report in the Cobertura format.

    Several classes may share one filename, their lines are merged by taking
    the highest hit count of each line.
    """
    root = parse_xml(content, "Cobertura")

    builders = dict[str, FileCoverageBuilder]()
    xml_class: etree._Element
    for xml_class in root.iter("class"):
        filename = xml_class.get("filename")
        if filename is None:
            LOGGER.warning(
                f"Missing filename attribute in class element at line {xml_class.sourceline}"
            )
            continue

        if filename in builders:
            LOGGER.debug(
                f"Merge class {xml_class.get('name')!r} into file: {filename}"
            )
        else:
            LOGGER.debug(f"Processing Cobertura file: {filename}")
        builder = builders.setdefault(filename, FileCoverageBuilder(filename))
        builder.complexity += _complexity_from_xml(xml_class)

        xml_line: etree._Element
        for xml_line in xml_class.iterfind("lines/line"):
            _insert_line_from_xml(builder, xml_line)

        xml_method: etree._Element
        for xml_method in xml_class.iterfind("methods/method"):
            _insert_method_from_xml(builder, xml_method)

    check_line_budget(
        (builder.last_line for builder in builders.values()), content, "Cobertura"
    )
    return CoverageReport.from_files(builder.build() for builder in builders.values())


def parse_condition_coverage(text: str) -> Metric:
    """Get the branch metric of a condition-coverage attribute.

    >>> parse_condition_coverage("50% (1/2)")
    Metric(total=2, covered=1)

    A malformed value counts as no branches at all:
    >>> parse_condition_coverage("50%")
    Metric(total=0, covered=0)
    """
    if (match := CONDITION_COVERAGE.match(text)) is not None:
        covered, total = int(match.group(1)), int(match.group(2))
        if covered <= total:
            return Metric(total, covered)

    LOGGER.warning(f"Invalid branch information {text!r}, counted as no branches.")
    return Metric.new_empty()


def _complexity_from_xml(xml_class: etree._Element) -> int:
    value = xml_class.get("complexity")
    if value is None:
        return 0
    try:
        complexity = float(value)
    except ValueError:
        LOGGER.debug(f"Ignoring complexity {value!r} at line {xml_class.sourceline}.")
        return 0
    if math.isnan(complexity) or math.isinf(complexity) or complexity < 0:
        return 0
    return int(complexity)


def _insert_line_from_xml(builder: FileCoverageBuilder, xml_line: etree._Element) -> None:
    lineno = line_number(xml_line, "number")
    count = count_attribute(xml_line, "hits")
    builder.insert_line(lineno, count)

    if xml_line.get("branch") == "true":
        if (branch_msg := xml_line.get("condition-coverage")) is not None:
            builder.insert_branch(lineno, parse_condition_coverage(branch_msg))


def _insert_method_from_xml(
    builder: FileCoverageBuilder, xml_method: etree._Element
) -> None:
    lines = dict[int, int]()
    xml_line: etree._Element
    for xml_line in xml_method.iterfind("lines/line"):
        lineno = line_number(xml_line, "number")
        lines[lineno] = max(count_attribute(xml_line, "hits"), lines.get(lineno, 0))
        builder.insert_line(lineno, lines[lineno])

    name = xml_method.get("name")
    if not name:
        LOGGER.warning(
            f"Missing name attribute in method element at line {xml_method.sourceline}"
        )
        return
    if not lines:
        LOGGER.debug(f"Method {name!r} in {builder.path} has no lines, skipped.")
        return

    start_line = min(lines)
    builder.insert_method(name, start_line, lines[start_line])
