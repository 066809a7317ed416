#
# Licensed to the Apache Software Foundation (ASF) under one
# or more contributor license agreements.  See the NOTICE file
# distributed with this work for additional information
# regarding copyright ownership.  The ASF licenses this file
# to you under the Apache License, Version 2.0 (the
# "License"); you may not use this file except in compliance
# with the License.  You may obtain a copy of the License at
#
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing,
# software distributed under the License is distributed on an
# "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY
# KIND, either express or implied.  See the License for the
# specific language governing permissions and limitations
# under the License.
"""Command-line interface"""

import argparse
from argparse import RawTextHelpFormatter
from typing import Callable, Iterable, NamedTuple, Optional

from sqlcrash.clients import CLIENT_TYPE_TO_CLASS
from sqlcrash.utils.module_loading import import_string


def lazy_load_command(import_path: str) -> Callable:
    """Create a lazy loader for command"""
    _, _, name = import_path.rpartition('.')

    def command(*args, **kwargs):
        func = import_string(import_path)
        return func(*args, **kwargs)

    command.__name__ = name

    return command


class DefaultHelpParser(argparse.ArgumentParser):
    """CustomParser to display help message"""

    def error(self, message):
        """Override error and use print_instead of print_usage"""
        self.print_help()
        self.exit(2, f'\n{self.prog} command error: {message}, see help above.\n')


# Used in Arg to enable `None' as a distinct value from "not passed"
_UNSET = object()


class Arg:
    """Class to keep information about command line argument"""

    # pylint: disable=redefined-builtin,unused-argument
    def __init__(
        self,
        flags=_UNSET,
        help=_UNSET,
        action=_UNSET,
        default=_UNSET,
        nargs=_UNSET,
        type=_UNSET,
        choices=_UNSET,
        required=_UNSET,
        metavar=_UNSET,
    ):
        self.flags = flags
        self.kwargs = {}
        for k, v in locals().items():
            if v is _UNSET:
                continue
            if k in ("self", "flags"):
                continue

            self.kwargs[k] = v

    # pylint: enable=redefined-builtin,unused-argument

    def add_to_parser(self, parser: argparse.ArgumentParser):
        """Add this argument to an ArgumentParser"""
        parser.add_argument(*self.flags, **self.kwargs)


def non_negative_int(value):
    """Define a non-negative int type for an argument."""
    try:
        value = int(value)
        if value >= 0:
            return value
    except ValueError:
        pass
    raise argparse.ArgumentTypeError(f"invalid non-negative int value: '{value}'")


# Shared
ARG_CONFIG = Arg(("config",), help="Path of the YAML configuration of the server instances")
ARG_CLIENT_TYPE = Arg(
    ("-t", "--type"),
    help="Database engine of the server",
    choices=sorted(CLIENT_TYPE_TO_CLASS),
    default="mysql",
)
ARG_INDEX = Arg(
    ("-i", "--index"),
    help="Position of the server instance in the per-instance lists of the configuration",
    type=non_negative_int,
    default=0,
)
ARG_VERBOSE = Arg(("-v", "--verbose"), help="Make logging output more verbose", action="store_true")

# execute
ARG_QUERY_FILES = Arg(
    ("-f", "--file"),
    help="File holding a query, may be repeated. The query is read from stdin when omitted",
    action="append",
    metavar="FILE",
)
ARG_SHOW_OUTPUT = Arg(
    ("--show-output",),
    help="Print the affected rows and cells accumulated from the result sets",
    action="store_true",
)


class ActionCommand(NamedTuple):
    """Single CLI command"""

    name: str
    help: str
    func: Callable
    args: Iterable[Arg]
    description: Optional[str] = None
    epilog: Optional[str] = None


CLIENT_COMMANDS = (
    ActionCommand(
        name='startup-command',
        help="Print the command that starts the selected server instance",
        func=lazy_load_command('sqlcrash.cli.commands.client_command.startup_command'),
        args=(ARG_CONFIG, ARG_CLIENT_TYPE, ARG_INDEX, ARG_VERBOSE),
    ),
    ActionCommand(
        name='check-alive',
        help="Check whether the selected server instance accepts connections",
        func=lazy_load_command('sqlcrash.cli.commands.client_command.check_alive'),
        args=(ARG_CONFIG, ARG_CLIENT_TYPE, ARG_INDEX, ARG_VERBOSE),
        description="Prints 'alive' or 'dead'. Exits with status 1 when the server is dead.",
    ),
    ActionCommand(
        name='execute',
        help="Run queries in a fresh database and print their outcome",
        func=lazy_load_command('sqlcrash.cli.commands.client_command.execute'),
        args=(ARG_CONFIG, ARG_CLIENT_TYPE, ARG_INDEX, ARG_QUERY_FILES, ARG_SHOW_OUTPUT, ARG_VERBOSE),
        description=(
            "Creates the database of one iteration, runs every query file in it and drops it.\n"
            "Exits with status 3 when a query crashed the server."
        ),
    ),
)


def _sort_args(args: Iterable[Arg]) -> Iterable[Arg]:
    """Sort subcommand optional args, keep positional args"""
    args = list(args)
    positional = [arg for arg in args if not arg.flags[0].startswith("-")]
    optional = [arg for arg in args if arg.flags[0].startswith("-")]

    def get_long_option(arg: Arg):
        """Get long option from Arg.flags"""
        return arg.flags[0] if len(arg.flags) == 1 else arg.flags[1]

    yield from positional
    yield from sorted(optional, key=lambda x: get_long_option(x).lower())


def _add_command(subparsers: argparse._SubParsersAction, sub: ActionCommand) -> None:  # noqa
    sub_proc = subparsers.add_parser(
        sub.name, help=sub.help, description=sub.description or sub.help, epilog=sub.epilog
    )
    sub_proc.formatter_class = RawTextHelpFormatter
    for arg in _sort_args(sub.args):
        arg.add_to_parser(sub_proc)
    sub_proc.set_defaults(func=sub.func)


def get_parser() -> argparse.ArgumentParser:
    """Creates and returns command line argument parser"""
    parser = DefaultHelpParser(prog="sqlcrash")
    subparsers = parser.add_subparsers(dest='subcommand', metavar="COMMAND")
    subparsers.required = True

    for sub in sorted(CLIENT_COMMANDS, key=lambda x: x.name):
        _add_command(subparsers, sub)
    return parser
