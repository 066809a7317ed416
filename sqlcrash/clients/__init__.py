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
"""Database clients, one per server engine, sharing the DBClient contract."""
from typing import Dict

from sqlcrash.clients.base import DBClient
from sqlcrash.exceptions import UnknownClientTypeException
from sqlcrash.utils.module_loading import import_string

# Add an engine by adding an entry, the classes are imported on first use
# so only the driver of the selected engine has to be installed.
CLIENT_TYPE_TO_CLASS: Dict[str, str] = {
    "mysql": "sqlcrash.clients.mysql.MySQLClient",
    "postgres": "sqlcrash.clients.postgres.PostgreSQLClient",
}


def get_client(client_type: str) -> DBClient:
    """
    Returns a new, uninitialized client for ``client_type``.

    :param client_type: key of :data:`CLIENT_TYPE_TO_CLASS`
    :raises UnknownClientTypeException: when no client is registered for the type
    """
    client_class_name = CLIENT_TYPE_TO_CLASS.get(client_type)
    if not client_class_name:
        raise UnknownClientTypeException(f'Unknown client type "{client_type}"')
    client_class = import_string(client_class_name)
    return client_class()
