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

import MySQLdb
from MySQLdb.constants import CLIENT, CR, ER

from sqlcrash.clients.dbapi import DbApiClient
from sqlcrash.utils.state import ExecutionStatus

CRASH_ERROR_CODES = frozenset({CR.SERVER_GONE_ERROR, CR.SERVER_LOST})

DEFAULT_PORT = 3306


def is_crash_response(code) -> bool:
    """Whether a MySQL error code means the connection to the server was lost."""
    return code in CRASH_ERROR_CODES


class MySQLClient(DbApiClient):
    """
    Runs queries against a MySQL (or MariaDB) server with ``mysqlclient``.

    Queries are sent as multi-statement batches. Cells are fetched without any
    conversion, so the accumulated output holds their exact bytes.
    """

    client_type = 'mysql'
    driver_error = MySQLdb.Error

    def get_conn(self, database=None):
        """
        Returns a mysql connection object
        """
        config = self.config
        conn_config = {
            "user": config.user_name,
            "passwd": config.passwd or '',
            "host": config.host or 'localhost',
            "port": int(config.port) if config.port else DEFAULT_PORT,
            "client_flag": CLIENT.MULTI_STATEMENTS,
            "autocommit": True,
            # No converters: every cell comes back as the bytes sent by the server
            "conv": {},
            "use_unicode": False,
        }
        if database:
            conn_config["db"] = database
        if config.sock_path:
            conn_config["unix_socket"] = config.sock_path
        return MySQLdb.connect(**conn_config)

    def classify_error(self, error, conn) -> ExecutionStatus:
        code = error.args[0] if error.args else None
        if is_crash_response(code):
            return ExecutionStatus.SERVER_CRASH
        if code == ER.PARSE_ERROR:
            return ExecutionStatus.SYNTAX_ERROR
        return ExecutionStatus.SEMANTIC_ERROR
