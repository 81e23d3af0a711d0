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
Script to generate the installer for covinsight.
"""

import os

from runpy import run_path
from setuptools import setup, find_packages


version = run_path("./src/covinsight/version.py")["__version__"]
# read the contents of your README file
this_directory = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(this_directory, "README.rst"), encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="covinsight",
    version=version,
    description=(
        "Parse, compare, merge and correlate Clover and Cobertura coverage reports."
    ),
    long_description=long_description,
    long_description_content_type="text/x-rst",
    platforms=["any"],
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages(where="src", include=["covinsight*"]),
    install_requires=[
        "lxml",
        "colorlog",
        "unidiff>=0.7.0",
        "tomli >= 1.1.0 ; python_version < '3.11'",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
        "dev": [
            "mypy",
            "nox",
            "pytest",
            "pytest-cov",
            "ruff",
            "lxml-stubs",
        ],
    },
    entry_points={
        "console_scripts": [
            "covinsight=covinsight.__main__:main",
        ],
    },
)
