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

from enum import Enum
from typing import NamedTuple


class ExecutionStatus(str, Enum):
    """
    Enum that represents every outcome a query execution can have.

    The values are the strings exchanged with the fuzzing driver, do not change them.
    Only SERVER_CRASH should change the control flow of the driver, the other
    outcomes are expected results of malformed or invalid SQL.
    """

    NORMAL = "kNormal"  # Every statement of the batch succeeded
    SYNTAX_ERROR = "kSyntaxError"  # Rejected by the parser
    SEMANTIC_ERROR = "kSemanticError"  # Any other error reported by the server
    SERVER_CRASH = "kServerCrash"  # Connection lost, gone or never established

    def __str__(self) -> str:  # pylint: disable=invalid-str-returned
        return self.value

    @property
    def is_crash(self) -> bool:
        """Whether the outcome signals a potential server bug."""
        return self is ExecutionStatus.SERVER_CRASH


class QueryResult(NamedTuple):
    """Outcome of a query together with the text accumulated from its result sets."""

    status: ExecutionStatus
    output: bytes = b""
