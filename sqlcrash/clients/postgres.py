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

from typing import Mapping

import psycopg2
import psycopg2.errorcodes
import psycopg2.errors
from psycopg2 import sql

from sqlcrash.clients.dbapi import DbApiClient
from sqlcrash.exceptions import SqlCrashConfigException
from sqlcrash.utils.state import ExecutionStatus

DEFAULT_MAINTENANCE_DB = 'postgres'
DEFAULT_CONNECT_TIMEOUT = 4

# Class 57P: operator intervention (admin shutdown, crash shutdown, cannot connect now)
CRASH_SQLSTATE_CLASS = '57P'


class PostgreSQLClient(DbApiClient):
    """
    Runs queries against a PostgreSQL server with ``psycopg2``.

    The server is not started through this layer, so only ``ports`` is read from
    the per-instance lists and the startup command is empty. A batch of several
    statements is sent as one simple query; the driver only reports its last
    result set, which is therefore the only one in the accumulated output. The
    query is handed to libpq as a C string: a NUL byte ends it, whatever follows
    is never sent to the server.

    Iteration databases are created and dropped under a quoted identifier, so
    their name keeps the case of ``db_prefix``, which is the name ``get_conn`` selects.

    Optional configuration keys: ``maintenance_db``, the database connected to
    when no iteration database is selected (default ``postgres``), and
    ``connect_timeout`` in seconds (default 4).
    """

    client_type = 'postgres'
    instance_fields = ('ports',)
    requires_startup_cmd = False
    driver_error = psycopg2.Error

    def __init__(self):
        super().__init__()
        self.maintenance_db = DEFAULT_MAINTENANCE_DB
        self.connect_timeout = DEFAULT_CONNECT_TIMEOUT

    def initialize(self, config, instance_index):
        if not isinstance(config, Mapping):
            raise SqlCrashConfigException(f"The configuration should be a mapping, got {type(config)}")
        maintenance_db = config.get('maintenance_db') or DEFAULT_MAINTENANCE_DB
        connect_timeout = config.get('connect_timeout', DEFAULT_CONNECT_TIMEOUT)
        try:
            connect_timeout = int(connect_timeout)
        except (TypeError, ValueError):
            raise SqlCrashConfigException(f"Invalid connect_timeout '{connect_timeout}' in the configuration")
        super().initialize(config, instance_index)
        self.maintenance_db = str(maintenance_db)
        self.connect_timeout = connect_timeout

    def _build_startup_command(self, config):
        return ''

    def get_conn(self, database=None):
        config = self.config
        conn_args = dict(
            host=config.host,
            user=config.user_name,
            password=config.passwd,
            dbname=database or self.maintenance_db,
            port=config.port,
            connect_timeout=self.connect_timeout,
        )
        psycopg2_conn = psycopg2.connect(**conn_args)
        # CREATE/DROP DATABASE can not run inside a transaction block
        psycopg2_conn.autocommit = True
        return psycopg2_conn

    def create_database(self, database: str) -> bool:
        with self.connection() as conn:
            if conn is None:
                return False
            try:
                with self.cursor(conn) as cur:
                    cur.execute("SELECT 1 FROM pg_database WHERE datname = %s", (database,))
                    if cur.fetchone():
                        return True
                    cur.execute(self.create_database_statement(database))
            except psycopg2.errors.DuplicateDatabase:
                self.log.debug("Database %s already exists", database)
            except psycopg2.Error as e:
                self.log.warning("Creating database %s failed: %s", database, e)
                return False
            return True

    def create_database_statement(self, database: str) -> sql.Composed:
        return sql.SQL("CREATE DATABASE {}").format(sql.Identifier(database))

    def drop_database_statement(self, database: str) -> sql.Composed:
        return sql.SQL("DROP DATABASE IF EXISTS {}").format(sql.Identifier(database))

    def classify_error(self, error, conn) -> ExecutionStatus:
        pgcode = getattr(error, 'pgcode', None) or ''
        if conn.closed or pgcode.startswith(CRASH_SQLSTATE_CLASS):
            return ExecutionStatus.SERVER_CRASH
        if pgcode == psycopg2.errorcodes.SYNTAX_ERROR:
            return ExecutionStatus.SYNTAX_ERROR
        return ExecutionStatus.SEMANTIC_ERROR

    def _result_sets(self, cur):
        # psycopg2 does not support nextset()
        yield cur
