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

import os
from pathlib import Path
from runpy import run_path
import shutil

import nox

DEFAULT_TEST_DIRECTORIES = ["src", "tests"]
DEFAULT_LINT_ARGUMENTS = [
    "noxfile.py",
    "setup.py",
    "src",
    "tests",
]
DEV_REQUIREMENTS = [
    "build",
    "coverage",
    "lxml-stubs",
    "mypy",
    "pytest",
    "pytest-cov",
    "ruff",
    "twine",
    "wheel",
]

CI_RUN = "GITHUB_ACTION" in os.environ

nox.options.sessions = ["qa"]


def get_covinsight_version() -> str:
    """Get the current version."""
    return str(run_path("./src/covinsight/version.py")["__version__"])


def install_dev_requirements(session: nox.Session, *requirements: str) -> None:
    """Install the needed development packages."""
    session.install(
        *[
            d
            for d in DEV_REQUIREMENTS
            if any(d.startswith(requirement) for requirement in requirements)
        ]
    )


@nox.session(python=False)
def qa(session: nox.Session) -> None:
    """Run the linters and the tests."""
    for session_id in ["lint", "tests"]:
        session.log(f"Notify session {session_id}")
        session.notify(session_id, [])


@nox.session(python=False)
def lint(session: nox.Session) -> None:
    """Run the linters."""
    session.notify("ruff_check")
    session.notify("ruff_format")
    session.notify("mypy")


@nox.session
def ruff_check(session: nox.Session) -> None:
    """Run ruff check command."""
    install_dev_requirements(session, "ruff")
    if session.posargs:
        args = session.posargs
    else:
        args = ["."]
    session.run("ruff", "check", *args)


@nox.session
def ruff_format(session: nox.Session) -> None:
    """Run ruff format command."""
    install_dev_requirements(session, "ruff")
    if session.posargs:
        args = session.posargs
    else:
        args = ["--diff", "."]
    session.run("ruff", "format", *args)


@nox.session
def mypy(session: nox.Session) -> None:
    """Run mypy command."""
    install_dev_requirements(session, "mypy", "lxml-stubs", "pytest")
    session.install("-e", ".")
    if session.posargs:
        args = session.posargs
    else:
        args = DEFAULT_LINT_ARGUMENTS
    session.run("mypy", "--ignore-missing-imports", *args)


@nox.session
def tests(session: nox.Session) -> None:
    """Run the unit tests and the doctests."""
    use_coverage = os.environ.get("USE_COVERAGE") == "true"
    requirements = ["pytest"]
    if use_coverage:
        requirements += ["coverage", "pytest-cov"]
    install_dev_requirements(session, *requirements)
    session.install("-e", ".")

    args = ["-m", "pytest", "--doctest-modules"]
    if use_coverage:
        args += ["--cov=src", "--cov-branch"]
    args += session.posargs
    if "--" not in args:
        args += ["--"] + DEFAULT_TEST_DIRECTORIES

    # Delay the session failure,
    # even if command fail we want to get the coverage report.
    try:
        session.run("python", *args)
    finally:
        if use_coverage:
            session.run("coverage", "xml")
            if not CI_RUN:
                session.run("coverage", "html")


@nox.session
def build_distribution(session: nox.Session) -> None:
    """Build a wheel."""
    install_dev_requirements(session, "build")
    # Remove old dist if present
    dist_dir = Path("dist")
    if dist_dir.exists():
        shutil.rmtree(dist_dir)
    session.run("python", "-m", "build")
    session.notify("check_distribution")


@nox.session
def check_distribution(session: nox.Session) -> None:
    """Check the wheel and do a smoke test, should not be used directly."""
    install_dev_requirements(session, "wheel", "twine")
    with session.chdir("dist"):
        session.run("twine", "check", "*", external=True)
        session.run("pip", "uninstall", "--yes", "covinsight")
        session.install(str(list(Path().glob("*.whl"))[0]))
    session.run("python", "-m", "covinsight", "--help", external=True)
    session.run("covinsight", "--version", external=True)
    session.log(f"Checked covinsight {get_covinsight_version()}")
