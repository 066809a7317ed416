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
"""Base class for all database clients"""
from typing import Any, Mapping, Union

from sqlcrash.utils.log.logging_mixin import LoggingMixin
from sqlcrash.utils.state import ExecutionStatus, QueryResult


class DBClient(LoggingMixin):
    """
    Abstract base class for database clients. A client drives a single server
    instance for one harness: it creates a fresh database for every test
    iteration, runs queries against it, reduces the server response to an
    :class:`~sqlcrash.utils.state.ExecutionStatus` and drops the database again.

    The driver calls ``initialize`` once, then cycles
    ``prepare_env -> execute (N times) -> clean_up_env`` and polls
    ``check_alive`` between cycles. Errors of the server or of the driver
    library are never raised by these operations.
    """

    # Override with the name used to look the client up in the registry.
    client_type = None  # type: str

    def initialize(self, config: Mapping[str, Any], instance_index: int) -> None:
        """
        Bind the configuration of the ``instance_index``-th server instance.

        :raises SqlCrashConfigException: when a field is missing or the index is out of range
        """
        raise NotImplementedError()

    def get_startup_command(self) -> str:
        """Returns the command the process manager uses to start the server."""
        raise NotImplementedError()

    def prepare_env(self) -> None:
        """Set up a clean database for the next test iteration."""
        raise NotImplementedError()

    def execute(self, query: Union[bytes, str]) -> ExecutionStatus:
        """Run ``query`` in the current database and classify the response."""
        return self.execute_with_output(query).status

    def execute_with_output(self, query: Union[bytes, str]) -> QueryResult:
        """Like ``execute``, also returning the affected rows and cells of every result set."""
        raise NotImplementedError()

    def clean_up_env(self) -> None:
        """Drop the database of the current test iteration."""
        raise NotImplementedError()

    def check_alive(self) -> bool:
        """Whether the server currently accepts connections."""
        raise NotImplementedError()
