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
from argparse import ArgumentParser, ArgumentTypeError, SUPPRESS
from dataclasses import dataclass
import os
import re
from typing import Any, Callable, Iterable, Optional, TextIO, Union

from .formats import Format
from .options import ConfigOption, Options, check_input_file, check_percentage


def argument_parser_setup(parser: ArgumentParser, default_group: Any) -> None:
    r"""Add all options and groups to the given argparse parser."""

    # setup option groups
    groups = {}
    for group_def in CONFIG_OPTION_GROUPS:
        group = parser.add_argument_group(
            group_def["name"],
            description=group_def["description"],
        )
        groups[group_def["key"]] = group

    # create each option value
    for opt in CONFIG_OPTIONS:
        group = default_group if opt.group is None else groups[opt.group]

        kwargs: dict[str, Any] = {
            "action": opt.action,
            "default": SUPPRESS,  # default will be assigned manually
            "help": opt.help,
            "metavar": opt.metavar,
        }

        # To avoid store_const problems, optionally set const, choices, nargs, type:
        if opt.action == "store_const":
            kwargs["const"] = opt.const
        if opt.choices is not None:
            kwargs["choices"] = opt.choices
        if opt.nargs is not None:
            kwargs["nargs"] = opt.nargs
        if opt.type is not None:
            kwargs["type"] = opt.type

        if opt.flags:
            kwargs["dest"] = opt.name
            group.add_argument(*opt.flags, **kwargs)
        elif opt.positional:
            group.add_argument(opt.name, **kwargs)
        else:
            raise AssertionError("Oops, sanity check failed: Unexpected option.")


def parse_config_into_dict(
    config_entry_source: Iterable[ConfigEntry],
    all_options: Optional[Iterable[ConfigOption]] = None,
) -> dict[str, Any]:
    """Convert the config entries into a partial namespace."""
    cfg_dict = dict[str, Any]()

    if all_options is None:
        all_options = CONFIG_OPTIONS

    options_lookup = dict[str, ConfigOption]()
    for option in all_options:
        if option.config_keys is not None:
            for config_key in option.config_keys:
                options_lookup[config_key] = option

    for cfg_entry in config_entry_source:
        try:
            option = options_lookup[cfg_entry.key]
        except KeyError:
            raise cfg_entry.error("unknown config option") from None

        value = _get_value_from_config_entry(cfg_entry, option)
        _assign_value_to_dict(cfg_dict, value, option, is_single_value=True)

    return cfg_dict


def _get_value_from_config_entry(
    cfg_entry: ConfigEntry,
    option: ConfigOption,
) -> Any:
    # special case: store_const expects a boolean
    if option.action == "store_const":
        return option.const if cfg_entry.value_as_bool else option.default

    value: Any
    if option.type is not None:
        if cfg_entry.filename is None:
            raise AssertionError(
                "Conversion function must derive base directory from filename"
            )
        converter = _get_converter_function(
            option.type, basedir=os.path.dirname(cfg_entry.filename)
        )
        try:
            value = converter(str(cfg_entry.value))
        except (ValueError, ArgumentTypeError) as err:
            raise cfg_entry.error(str(err)) from None
    else:
        value = cfg_entry.value

    # verify choices:
    if option.choices is not None and value not in option.choices:
        raise cfg_entry.error(
            "must be one of ({}) but got {!r}",
            ", ".join(repr(choice) for choice in option.choices),
            value,
        )

    return value


def _get_converter_function(
    option_type: Callable[[str], Any],
    *,
    basedir: str,
) -> Callable[[str], Any]:
    """
    Obtain a converter function that corresponds to `option.type`.

    Paths in a config file are relative to the directory of the file.
    """
    if option_type is check_input_file:
        return lambda value: check_input_file(value, basedir)

    return option_type


def _assign_value_to_dict(
    namespace: dict[str, Any],
    value: Any,
    option: ConfigOption,
    is_single_value: bool,
) -> None:
    if option.action == "append" or option.nargs == "*":
        append_target = namespace.setdefault(option.name, [])
        if is_single_value:
            append_target.append(value)
        else:
            append_target.extend(value)
        return

    if option.action in ("store", "store_const"):
        namespace[option.name] = value
        return

    raise AssertionError(f"Unexpected action for {option.name}: {option.action!r}")


def merge_options_and_set_defaults(
    partial_namespaces: list[dict[str, Any]],
    all_options: Optional[list[ConfigOption]] = None,
) -> Options:
    """Merge the namespaces and set the defaults.

    Later namespaces override single values, list values are combined.
    """
    if not partial_namespaces:
        raise AssertionError("At least one namespace required")

    if all_options is None:
        all_options = CONFIG_OPTIONS

    target = dict[str, Any]()
    for namespace in partial_namespaces:
        for option in all_options:
            if option.name not in namespace:
                continue

            _assign_value_to_dict(
                target, namespace[option.name], option, is_single_value=False
            )

    # if no value was provided, set the default.
    for option in all_options:
        target.setdefault(
            option.name,
            list(option.default) if isinstance(option.default, list) else option.default,
        )

    return Options(**target)


CONFIG_OPTION_GROUPS = [
    {
        "key": "input_options",
        "name": "Input Options",
        "description": (
            "Each report given on the command line is the result of one test "
            "suite run (flag) of the same commit, the reports are merged."
        ),
    },
    {
        "key": "comparison_options",
        "name": "Comparison Options",
        "description": (
            "Compare the merged report against a baseline "
            "and check the lines added by a unified diff."
        ),
    },
    {
        "key": "output_options",
        "name": "Output Options",
        "description": "The result is written as a JSON document.",
    },
]


# Style guide for option descriptions:
# - Prefer complete sentences.
# - Phrase first sentence as a command:
#   “Print report”, not “Prints report”.

CONFIG_OPTIONS = [
    ConfigOption(
        "verbose",
        ["-v", "--verbose"],
        help="Print progress messages. Please include this output in bug reports.",
        action="store_true",
    ),
    ConfigOption(
        "no_color",
        ["--no-color"],
        help=(
            "Turn off colored logging."
            " Is also set if environment variable NO_COLOR is present."
            " Ignored if --force-color is used."
        ),
        action="store_true",
    ),
    ConfigOption(
        "force_color",
        ["--force-color"],
        help=(
            "Force colored logging, this is the default for a terminal."
            " Is also set if environment variable FORCE_COLOR is present."
            " Has precedence over --no-color."
        ),
        action="store_true",
    ),
    ConfigOption(
        "config",
        ["--config"],
        config=False,
        help=(
            "Load that configuration file. "
            "Defaults to covinsight.cfg, covinsight.toml or "
            "the [tool.covinsight] section of pyproject.toml "
            "in the current directory."
        ),
        metavar="CONFIG",
        type=check_input_file,
    ),
    ConfigOption(
        "reports",
        config="report",
        positional=True,
        group="input_options",
        help="Read these Clover or Cobertura XML reports.",
        metavar="report",
        nargs="*",
        type=check_input_file,
        default=[],
    ),
    ConfigOption(
        "format",
        ["--format"],
        group="input_options",
        help=(
            "Read all reports in this format instead of detecting it. "
            "One of {}."
        ).format(", ".join(str(fmt) for fmt in Format)),
        choices=tuple(str(fmt) for fmt in Format),
    ),
    ConfigOption(
        "strip_prefix",
        ["--strip-prefix"],
        group="input_options",
        help=(
            "Strip this prefix from all paths. "
            "By default the common directory of all paths is stripped."
        ),
        metavar="PREFIX",
    ),
    ConfigOption(
        "base",
        ["--base"],
        group="comparison_options",
        help=(
            "Compare against this report, can be given several times "
            "for the flags of the base commit."
        ),
        action="append",
        metavar="report",
        type=check_input_file,
        default=[],
    ),
    ConfigOption(
        "head_sha",
        ["--head-sha"],
        group="comparison_options",
        help="Use this commit SHA for the head in the result.",
        metavar="SHA",
    ),
    ConfigOption(
        "base_sha",
        ["--base-sha"],
        group="comparison_options",
        help="Use this commit SHA for the base in the result.",
        metavar="SHA",
    ),
    ConfigOption(
        "diff",
        ["--diff"],
        group="comparison_options",
        help="Check the lines added by this unified diff for coverage.",
        metavar="DIFF",
        type=check_input_file,
    ),
    ConfigOption(
        "json",
        ["--json"],
        group="output_options",
        help="Write the result to OUTPUT, '-' is stdout.",
        metavar="OUTPUT",
        default="-",
    ),
    ConfigOption(
        "json_pretty",
        ["--json-pretty"],
        group="output_options",
        help="Pretty-print the JSON result.",
        action="store_true",
    ),
    ConfigOption(
        "fail_under",
        ["--fail-under"],
        group="output_options",
        help=(
            "Exit with a status of 2 "
            "if the total statement coverage is less than MIN. "
            "Can be ORed with exit status of '--fail-on-uncovered' option."
        ),
        metavar="MIN",
        type=check_percentage,
        default=0.0,
    ),
    ConfigOption(
        "fail_on_uncovered",
        ["--fail-on-uncovered"],
        group="output_options",
        help=(
            "Exit with a status of 4 if a line or method added by --diff "
            "is not covered."
        ),
        action="store_true",
    ),
]


CONFIG_HASH_COMMENT = re.compile(r"(?:^|\s+) [#] .* $", re.X)

# kebab-case word, separated from value (rest of line) by "=" with optional space
CONFIG_KV = re.compile(r"^((?=\w)[\w-]+) \s* = \s* (.*) $", re.X)


def parse_config_file(
    open_file: TextIO,
    filename: str,
    first_lineno: int = 1,
) -> Iterable[ConfigEntry]:
    r"""
    Parse an ini-style configuration format.

    Yields: ConfigEntry

    Example: basic syntax.

    >>> import io
    >>> cfg = u'''
    ... # this is a comment
    ... fail-under =   80  # trailing comment
    ... # the next line is empty
    ...
    ... base = flag-unit.xml
    ... base = flag-integration.xml
    ... '''
    >>> open_file = io.StringIO(cfg[1:])
    >>> for entry in parse_config_file(open_file, 'test.cfg'):
    ...     print(entry)
    test.cfg: 2: fail-under = 80
    test.cfg: 5: base = flag-unit.xml
    test.cfg: 6: base = flag-integration.xml
    """

    for lineno, line in enumerate(open_file, first_lineno):
        line = line.rstrip()

        # strip (trailing) comments
        line = CONFIG_HASH_COMMENT.sub("", line)

        if line.isspace() or not line:  # skip empty lines
            continue

        match = CONFIG_KV.match(line)
        if not match:
            raise SyntaxError(
                f'{filename}: {lineno}: expected "key = value" entry\non this line: {line}'
            )

        yield ConfigEntry(
            match.group(1).strip(), match.group(2), filename=filename, lineno=lineno
        )


def config_entries_from_dict(
    config: dict[str, Any],
    filename: str,
) -> Iterable[ConfigEntry]:
    r"""
    Generate config entries from a dictionary, e.g. a TOML table.

    >>> cfg = {
    ...     'base': ['unit.xml', 'integration.xml'],
    ...     'json-pretty': True,
    ... }
    >>> for entry in config_entries_from_dict(cfg, 'covinsight.toml'):
    ...     print(entry)
    covinsight.toml: ??: base = unit.xml
    covinsight.toml: ??: base = integration.xml
    covinsight.toml: ??: json-pretty = True
    """

    for key, value in config.items():
        if isinstance(value, list):
            for inner_value in value:
                yield ConfigEntry(key, inner_value, filename=filename)
        else:
            yield ConfigEntry(key, value, filename=filename)


@dataclass
class ConfigEntry:
    """A "key = value" config file entry."""

    key: str
    """The key. There might be other entries with the same key."""

    value: Union[str, bool, int, float]
    """The un-parsed value."""

    filename: Optional[str] = None
    """Path of the config file, for error messages."""

    lineno: Optional[int] = None
    """Line of the entry in the config file, for error messages."""

    def __str__(self) -> str:
        r"""
        Display the config entry.

        >>> print(ConfigEntry("the-key", "value",
        ...                   filename="foo.cfg", lineno=17))
        foo.cfg: 17: the-key = value
        """
        filename = self.filename or "<config>"
        lineno = self.lineno or "??"
        value = "# empty" if self.value == "" else self.value
        return f"{filename}: {lineno}: {self.key} = {value}"

    @property
    def value_as_bool(self) -> bool:
        r"""
        The value converted to a boolean.

        >>> ConfigEntry("k", "yes").value_as_bool
        True

        >>> ConfigEntry("k", "no").value_as_bool
        False

        >>> ConfigEntry("k", "foo").value_as_bool
        Traceback (most recent call last):
        ValueError: <config>: ??: k: boolean option must be "yes" or "no"
        """
        if isinstance(self.value, bool):
            return self.value
        if self.value == "yes":
            return True
        if self.value == "no":
            return False
        raise self.error('boolean option must be "yes" or "no"')

    def error(self, pattern: str, *args: Any, **kwargs: Any) -> ValueError:
        r"""
        Format but NOT RAISE a ValueError.

        >>> entry = ConfigEntry('fail-under', 'nun', lineno=3)
        >>> raise entry.error("expected number but got {value!r}")
        Traceback (most recent call last):
        ValueError: <config>: 3: fail-under: expected number but got 'nun'
        """
        filename = self.filename or "<config>"
        lineno = str(self.lineno or "??")
        kwargs.update(key=self.key, value=self.value)
        message = pattern.format(*args, **kwargs)
        return ValueError(": ".join([filename, lineno, self.key, message]))
