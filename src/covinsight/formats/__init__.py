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

import codecs
from enum import Enum
import logging
import re
from typing import Optional

from ..data_model.coverage import CoverageReport
from ..exceptions import UnrecognizedFormat
from .base import BaseHandler

# the handler
from .clover import CloverHandler
from .cobertura import CoberturaHandler

LOGGER = logging.getLogger("covinsight")

XML_START = re.compile(rb"^(?:\xef\xbb\xbf)?\s*<")
COVERAGE_MARKER = re.compile(rb"<coverage[\s/>]")
PROJECT_MARKER = re.compile(rb"<project[\s/>]")
LINE_RATE_MARKER = re.compile(rb"\sline-rate\s*=")


class Format(str, Enum):
    """The coverage report dialects we can read."""

    CLOVER = "clover"
    COBERTURA = "cobertura"

    def __str__(self) -> str:
        return self.value


HANDLERS: dict[Format, type[BaseHandler]] = {
    Format.CLOVER: CloverHandler,
    Format.COBERTURA: CoberturaHandler,
}


# UTF-32 first, its little endian BOM starts with the UTF-16 one.
WIDE_BOMS = (
    (codecs.BOM_UTF32_LE, "utf-32"),
    (codecs.BOM_UTF32_BE, "utf-32"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
)


def _markers_text(content: bytes) -> bytes:
    """Get the content in an ASCII compatible encoding for the marker scan."""
    for bom, encoding in WIDE_BOMS:
        if content.startswith(bom):
            return content.decode(encoding, errors="replace").encode("utf-8")
    return content


def detect(content: bytes) -> Format:
    """Classify the content without parsing it.

    >>> detect(b'<coverage generated="1"><project timestamp="1"/></coverage>')
    <Format.CLOVER: 'clover'>
    >>> detect(b'<coverage line-rate="0.5" branch-rate="0"></coverage>')
    <Format.COBERTURA: 'cobertura'>
    >>> detect('<coverage line-rate="1"/>'.encode("utf-16"))
    <Format.COBERTURA: 'cobertura'>
    """
    text = _markers_text(content)
    if XML_START.match(text) and COVERAGE_MARKER.search(text):
        if PROJECT_MARKER.search(text):
            return Format.CLOVER
        if LINE_RATE_MARKER.search(text):
            return Format.COBERTURA

    raise UnrecognizedFormat(
        "Content is neither a Clover nor a Cobertura coverage report."
    )


def parse(fmt: Format, content: bytes) -> CoverageReport:
    """Read the content with the reader bound to the format."""
    handler = HANDLERS[Format(fmt)]()
    LOGGER.debug(f"Reading {handler.name} report ({len(content)} bytes).")
    return handler.read_report(content)


def read_report(content: bytes, fmt: Optional[Format] = None) -> CoverageReport:
    """Read a report, the format is detected if not given."""
    if fmt is None:
        fmt = detect(content)
        LOGGER.debug(f"Detected {fmt} format.")
    return parse(fmt, content)
