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
#
# Note: errors coming from the database servers themselves are never raised
#       to the caller, they are turned into an ExecutionStatus instead.
"""Exceptions used by sqlcrash"""
from typing import List, NamedTuple, Optional


class SqlCrashException(Exception):
    """
    Base class for all sqlcrash errors.
    Each custom exception should be derived from this class
    """


class SqlCrashConfigException(SqlCrashException):
    """Raise when there is configuration problem"""


class UnknownClientTypeException(SqlCrashException):
    """Raise when no database client is registered for the requested type"""


class FileSyntaxError(NamedTuple):
    """Information about a single error in a file."""

    line_no: Optional[int]
    message: str

    def __str__(self):
        return f"{self.message}. Line number: {self.line_no}"


class SqlCrashFileParseException(SqlCrashConfigException):
    """
    Raise when a client configuration file can not be parsed

    :param msg: The human-readable description of the exception
    :param file_path: The configuration file that contains errors
    :param parse_errors: File syntax errors
    """

    def __init__(self, msg: str, file_path: str, parse_errors: List[FileSyntaxError]) -> None:
        super().__init__(msg)
        self.msg = msg
        self.file_path = file_path
        self.parse_errors = parse_errors

    def __str__(self):
        result = f"{self.msg}\nFilename: {self.file_path}\n\n"

        for error_no, parse_error in enumerate(self.parse_errors, 1):
            result += "=" * 20 + f" Parse error {error_no:3} " + "=" * 20 + "\n"
            result += f"{parse_error.message}\n"
            if parse_error.line_no:
                result += f"Line number:  {parse_error.line_no}\n"

        return result
