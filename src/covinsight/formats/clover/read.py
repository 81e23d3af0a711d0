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

# cspell:ignore coveredelements coveredconditionals coveredmethods coveredstatements

import logging
from typing import Optional
from lxml import etree  # nosec # Only parsed through parse_xml

from ...data_model.coverage import CoverageReport, FileCoverageBuilder
from ..base import (
    check_line_budget,
    count_attribute,
    int_attribute,
    line_number,
    metric_attributes,
    parse_xml,
)

LOGGER = logging.getLogger("covinsight")


def read_report(content: bytes) -> CoverageReport:
    """Read a report in the Clover format.

    Files may be listed directly below the project or nested in packages,
    the nesting doesn't change the result. The testproject section is skipped.
    """
    root = parse_xml(content, "Clover")
    project = root.find("project")
    scope = root if project is None else project

    builders = dict[str, FileCoverageBuilder]()
    xml_file: etree._Element
    for xml_file in scope.iter("file"):
        filename = xml_file.get("path") or xml_file.get("name")
        if not filename:
            LOGGER.warning(
                f"Missing path and name attribute in file element at line {xml_file.sourceline}"
            )
            continue

        if filename in builders:
            LOGGER.debug(f"Combine duplicate Clover file: {filename}")
        else:
            LOGGER.debug(f"Processing Clover file: {filename}")
        builder = builders.setdefault(filename, FileCoverageBuilder(filename))
        _insert_metrics_from_xml(builder, xml_file.find("metrics"))
        xml_line: etree._Element
        for xml_line in xml_file.iterfind("line"):
            _insert_line_from_xml(builder, xml_line)

    check_line_budget(
        (builder.last_line for builder in builders.values()), content, "Clover"
    )
    return CoverageReport.from_files(builder.build() for builder in builders.values())


def _insert_metrics_from_xml(
    builder: FileCoverageBuilder, xml_metrics: Optional[etree._Element]
) -> None:
    if xml_metrics is None:
        LOGGER.debug(f"No metrics element for {builder.path}, using zero metrics.")

    builder.add_metrics(
        statements=metric_attributes(xml_metrics, "statements", "coveredstatements"),
        methods=metric_attributes(xml_metrics, "methods", "coveredmethods"),
        branches=metric_attributes(
            xml_metrics, "conditionals", "coveredconditionals"
        ),
        elements=metric_attributes(xml_metrics, "elements", "coveredelements"),
        complexity=(
            0
            if xml_metrics is None
            else max(0, int_attribute(xml_metrics, "complexity"))
        ),
    )


def _insert_line_from_xml(builder: FileCoverageBuilder, xml_line: etree._Element) -> None:
    lineno = line_number(xml_line, "num", "number")
    line_type = xml_line.get("type")

    if line_type == "stmt":
        builder.insert_line(lineno, count_attribute(xml_line, "count"))
    elif line_type == "method":
        count = count_attribute(xml_line, "count")
        builder.insert_line(lineno, count)
        if name := xml_line.get("name"):
            builder.insert_method(name, lineno, count)
        else:
            LOGGER.warning(
                f"Method without name in {builder.path} at line {xml_line.sourceline}."
            )
    else:
        # Conditions are summarized by the metrics element.
        if line_type != "cond":
            LOGGER.debug(f"Unknown line type {line_type!r} in {builder.path}.")
        builder.mention_line(lineno)
