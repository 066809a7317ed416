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
from contextlib import closing, contextmanager
from typing import Any, Iterator, Mapping, Optional, Tuple, Type, Union

from sqlcrash.clients.base import DBClient
from sqlcrash.configuration import INSTANCE_FIELDS, ClientConfig
from sqlcrash.exceptions import SqlCrashException
from sqlcrash.utils.state import ExecutionStatus, QueryResult


class DbApiClient(DBClient):
    """
    Abstract base class for clients of servers reachable through a PEP 249 driver.

    Every operation opens its own connection and closes it before returning,
    connections are never cached. The database of an iteration is named
    ``db_prefix`` followed by a counter that only ``prepare_env`` increments,
    so a slow drop of the previous database never collides with the next one.
    """

    # Override with the per-instance lists the backend needs from the configuration.
    instance_fields: Tuple[str, ...] = tuple(INSTANCE_FIELDS)
    # Override if the server is not started with the assembled command.
    requires_startup_cmd = True
    # Override with the base exception class of the driver library.
    driver_error: Type[Exception] = Exception

    def __init__(self):
        super().__init__()
        self.database_id = 0
        self.config: Optional[ClientConfig] = None
        self._startup_command: Optional[str] = None

    def initialize(self, config: Mapping[str, Any], instance_index: int) -> None:
        if self.config is not None:
            raise SqlCrashException(f"{self.__class__.__name__} is already initialized")
        client_config = ClientConfig.from_mapping(
            config, instance_index, self.instance_fields, self.requires_startup_cmd
        )
        self._startup_command = self._build_startup_command(client_config)
        self.config = client_config
        self.log.debug("Initialized for instance %s on port %s", instance_index, client_config.port)

    def _build_startup_command(self, config: ClientConfig) -> str:
        return config.startup_command

    def get_startup_command(self) -> str:
        self._check_initialized()
        return self._startup_command

    @property
    def database_name(self) -> str:
        """Name of the database of the current iteration."""
        self._check_initialized()
        return f"{self.config.db_prefix}{self.database_id}"

    def _check_initialized(self) -> None:
        if self.config is None:
            raise SqlCrashException(f"{self.__class__.__name__} is not initialized")

    def get_conn(self, database: Optional[str] = None) -> Any:
        """
        Returns a connection object

        :param database: database to select, ``None`` for a connection to no particular database
        :raises driver_error: when the connection can not be established
        """
        raise NotImplementedError()

    @contextmanager
    def connection(self, database: Optional[str] = None) -> Iterator[Any]:
        """
        Yields an open connection, or ``None`` when the server can not be reached.
        The connection is closed when the block exits, whichever way it exits.
        """
        conn = self._connect(database)
        if conn is None:
            yield None
            return
        with closing(conn):
            yield conn

    @contextmanager
    def cursor(self, conn) -> Iterator[Any]:
        """
        Yields a cursor of ``conn`` and closes it when the block exits.

        Closing drains the pending result sets, so it fails once the server is gone;
        that failure is logged, the outcome of the block is already decided.
        """
        cur = conn.cursor()
        try:
            yield cur
        finally:
            try:
                cur.close()
            except self.driver_error as e:
                self.log.debug("Closing cursor failed: %s", e)

    def _connect(self, database: Optional[str]) -> Any:
        try:
            return self.get_conn(database)
        except self.driver_error as e:
            self.log.error("Create connection failed: %s", e)
            return None

    def prepare_env(self) -> None:
        self._check_initialized()
        self.database_id += 1
        if not self.create_database(self.database_name):
            self.log.error("Failed to create database %s", self.database_name)

    def create_database(self, database: str) -> bool:
        """Creates ``database`` unless it already exists, returns whether the server accepted it."""
        with self.connection() as conn:
            if conn is None:
                return False
            return self._run_env_statement(conn, self.create_database_statement(database))

    def create_database_statement(self, database: str) -> Any:
        return f"CREATE DATABASE IF NOT EXISTS {database};"

    def drop_database_statement(self, database: str) -> Any:
        return f"DROP DATABASE IF EXISTS {database};"

    def clean_up_env(self) -> None:
        self._check_initialized()
        with self.connection() as conn:
            if conn is None:
                return
            self._run_env_statement(conn, self.drop_database_statement(self.database_name))

    def _run_env_statement(self, conn, sql) -> bool:
        """Runs a statement that sets up or tears down an iteration, draining its result sets."""
        self.log.debug("Running statement: %s", sql)
        try:
            with self.cursor(conn) as cur:
                cur.execute(sql)
                for _ in self._result_sets(cur):
                    pass
        except self.driver_error as e:
            self.log.warning("Statement %s failed: %s", sql, e)
            return False
        return True

    def check_alive(self) -> bool:
        self._check_initialized()
        with self.connection() as conn:
            return conn is not None

    def execute_with_output(self, query: Union[bytes, str]) -> QueryResult:
        self._check_initialized()
        if isinstance(query, str):
            query = query.encode('utf-8')

        with self.connection(self.database_name) as conn:
            if conn is None:
                self.log.error("Cannot create connection at execute")
                return QueryResult(ExecutionStatus.SERVER_CRASH)
            return self._run_query(conn, query)

    def _run_query(self, conn, query: bytes) -> QueryResult:
        """
        Submits ``query`` and accumulates ``<affected rows> <cells>`` for every result set.

        An error raised while moving to a later result set stops the iteration but
        keeps what the earlier statements of the batch produced.
        """
        self.log.debug("Running query: %s", query)
        output = bytearray()
        error = None
        with self.cursor(conn) as cur:
            try:
                cur.execute(query)
            except self.driver_error as e:
                return QueryResult(self._classify(e, conn), bytes(output))

            try:
                for result in self._result_sets(cur):
                    output += self._format_result_set(result)
            except self.driver_error as e:
                error = e

        if error is None:
            return QueryResult(ExecutionStatus.NORMAL, bytes(output))
        return QueryResult(self._classify(error, conn), bytes(output))

    def _classify(self, error: Exception, conn) -> ExecutionStatus:
        status = self.classify_error(error, conn)
        if status.is_crash:
            self.log.warning("Server crash signal: %s", error)
        else:
            self.log.debug("%s: %s", status.name, error)
        return status

    def classify_error(self, error: Exception, conn) -> ExecutionStatus:
        """
        Maps an error of the driver library to an outcome.

        :param error: the error raised while running or draining the query
        :param conn: the connection the query ran on
        """
        raise NotImplementedError()

    def _result_sets(self, cur) -> Iterator[Any]:
        """Yields the cursor once per result set, moving it along with ``nextset``."""
        while True:
            yield cur
            if not cur.nextset():
                return

    def _format_result_set(self, cur) -> bytes:
        chunk = b"%d " % cur.rowcount
        if cur.description is None:
            return chunk
        return chunk + b"".join(
            self._serialize_cell(cell) for row in cur.fetchall() for cell in row if cell is not None
        )

    @staticmethod
    def _serialize_cell(cell) -> bytes:
        """
        Returns the bytes of a returned cell.

        :param cell: the cell as returned by the driver
        :return: the raw value for binary cells, the UTF-8 text of the value otherwise
        """
        if isinstance(cell, (bytes, bytearray, memoryview)):
            return bytes(cell)
        return str(cell).encode('utf-8')
