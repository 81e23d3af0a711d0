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
from argparse import ArgumentTypeError
import os
from typing import Any, Callable, Optional, Union


def check_percentage(value: Union[str, float]) -> float:
    r"""
    Check that the percentage is within a reasonable range and if so return it.

    >>> check_percentage("80%")
    80.0
    >>> check_percentage("101")
    Traceback (most recent call last):
      ...
    argparse.ArgumentTypeError: 101 not in range [0.0, 100.0]
    """
    value = str(value)
    # strip trailing percent sign if present, useful for config files
    if value.endswith("%"):
        value = value[:-1]

    try:
        x = float(value)
        if not 0.0 <= x <= 100.0:
            raise ValueError()
    except ValueError:
        raise ArgumentTypeError(f"{value} not in range [0.0, 100.0]") from None
    return x


def check_input_file(value: str, basedir: Optional[str] = None) -> str:
    r"""
    Check that the input file is present. Return the full path.
    """
    if basedir is None:
        basedir = os.getcwd()

    if not os.path.isabs(value):
        value = os.path.join(basedir, value)
    value = os.path.normpath(value)

    if not os.path.isfile(value):
        raise ArgumentTypeError(
            f"Should be a file that already exists: {value!r}"
        ) from None

    return os.path.abspath(value)


class Options:
    """Wrapper for holding the configuration."""

    def __init__(self, **kwargs: Any) -> None:
        self.__dict__.update(kwargs)

    def get(self, name: str) -> Any:
        """Function to get an option by name."""
        return self.__dict__.get(name)


class ConfigOption:
    # pylint: disable=too-many-instance-attributes
    # pylint: disable=too-few-public-methods
    # pylint: disable=redefined-builtin
    """
    One setting of covinsight, usable on the command line and in config files.

    ``name`` is the attribute in the Options namespace. ``flags`` are the
    command line switches, a positional option has none. The config key is
    the first long flag without dashes unless ``config`` names it, with
    ``config=False`` the setting is command line only.

    Supported actions are ``store``, ``store_const``, ``store_true`` (turned
    into ``store_const`` with True) and ``append``. ``type`` converts a string
    value and raises on bad input, ``choices`` are checked after conversion.
    """

    def __init__(
        self,
        name: str,
        flags: Optional[list[str]] = None,
        *,
        help: str,
        action: str = "store",
        choices: Optional[tuple[str, ...]] = None,
        const: Any = None,
        config: Union[str, bool] = True,
        default: Any = None,
        group: Optional[str] = None,
        metavar: Optional[str] = None,
        nargs: Union[int, str, None] = None,
        positional: bool = False,
        type: Optional[Callable[[str], Any]] = None,
    ) -> None:
        if flags is None:
            flags = []

        if flags and positional:
            raise AssertionError("Option cannot have flags and be positional")

        config_keys = _derive_configuration_key(config, flags=flags)
        del config

        if not (flags or positional or config_keys):
            raise AssertionError(
                "Option must be named, positional, or config argument."
            )

        if not help:
            raise AssertionError("help required")
        if (flags or positional) and config_keys:
            help += f" Config key(s): {', '.join(config_keys)}."

        # the store_true action has a hardcoded boolean constant in its
        # definition so it is switched to the generic store_const.
        if action == "store_true":
            if const is not None:
                raise AssertionError("action=store_true and const conflict")
            if default is not None:
                raise AssertionError("action=store_true and default conflict")
            action = "store_const"
            const = True
            default = False

        if action not in ("store", "store_const", "append"):
            raise AssertionError(f"Unknown action {action!r}")

        self.name = name
        self.flags = flags

        self.action = action
        self.choices = choices
        self.config_keys = config_keys
        self.const = const
        self.default = default
        self.group = group
        self.help = help
        self.metavar = metavar
        self.nargs = nargs
        self.positional = positional
        self.type = type

    def __repr__(self) -> str:
        r"""String representation of instance.

        >>> ConfigOption('foo', ['-f', '--foo'], help="foo text.")  # doctest: +ELLIPSIS
        ConfigOption('foo', [-f, --foo], ..., help='foo text. Config key(s): foo.', ...)
        """
        name = self.name
        flags = ", ".join(self.flags)
        kwargs = ", ".join(
            f"{k}={v!r}"
            for k, v in sorted(self.__dict__.items())
            if k not in ("name", "flags")
        )

        return f"ConfigOption({name!r}, [{flags}], {kwargs})"


def _derive_configuration_key(
    config: Union[str, bool],
    *,
    flags: list[str],
) -> Optional[list[str]]:
    if config is True:
        config_keys = [flag.lstrip("-") for flag in flags if flag.startswith("--")]
        if not config_keys:
            raise AssertionError(f"Could not autogenerate config key from {flags!r}.")
        return config_keys
    if config is False:
        return None
    if isinstance(config, str):
        return [config]

    raise AssertionError(
        f"Sanity check failed, unexpected config entry type {config!r}"
    )
