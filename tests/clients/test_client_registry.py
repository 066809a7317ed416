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

import unittest

from sqlcrash.clients import CLIENT_TYPE_TO_CLASS, get_client
from sqlcrash.clients.base import DBClient
from sqlcrash.clients.mysql import MySQLClient
from sqlcrash.clients.postgres import PostgreSQLClient
from sqlcrash.exceptions import UnknownClientTypeException


class TestClientRegistry(unittest.TestCase):
    def test_get_client(self):
        self.assertIsInstance(get_client("mysql"), MySQLClient)
        self.assertIsInstance(get_client("postgres"), PostgreSQLClient)

    def test_get_client_returns_new_instances(self):
        self.assertIsNot(get_client("mysql"), get_client("mysql"))

    def test_unknown_client_type(self):
        with self.assertRaisesRegex(UnknownClientTypeException, "sqlite"):
            get_client("sqlite")

    def test_registered_types_match_classes(self):
        for client_type in CLIENT_TYPE_TO_CLASS:
            with self.subTest(client_type=client_type):
                client = get_client(client_type)
                self.assertIsInstance(client, DBClient)
                self.assertEqual(client_type, client.client_type)
