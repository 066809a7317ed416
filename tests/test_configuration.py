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

import os
import unittest
from tempfile import TemporaryDirectory

from sqlcrash.configuration import ClientConfig, load_config
from sqlcrash.exceptions import SqlCrashConfigException, SqlCrashFileParseException

CONFIG = {
    'host': '127.0.0.1',
    'user_name': 'root',
    'passwd': '',
    'db_prefix': 'test',
    'ports': [3306, 3307],
    'executables': ['/usr/sbin/mysqld', '/opt/mysqld'],
    'basedirs': ['/usr', '/opt'],
    'datadirs': ['/data0', '/data1'],
    'pid_files': ['/tmp/0.pid', '/tmp/1.pid'],
    'sock_paths': ['/tmp/0.sock', '/tmp/1.sock'],
    'startup_cmd': ' --skip-grant-tables',
}


class TestClientConfig(unittest.TestCase):
    def test_from_mapping_selects_instance(self):
        config = ClientConfig.from_mapping(CONFIG, 1)
        self.assertEqual('3307', config.port)
        self.assertEqual('/opt/mysqld', config.executable)
        self.assertEqual('/tmp/1.sock', config.sock_path)
        self.assertEqual('', config.passwd)
        self.assertEqual(' --skip-grant-tables', config.extra_running_parameters)

    def test_startup_command(self):
        config = ClientConfig.from_mapping(CONFIG, 0)
        self.assertEqual(
            "/usr/sbin/mysqld --socket=/tmp/0.sock --pid_file=/tmp/0.pid --port=3306"
            " --basedir=/usr --datadir=/data0 --skip-grant-tables",
            config.startup_command,
        )

    def test_index_out_of_range(self):
        for index in (2, -1, True):
            with self.subTest(index=index):
                with self.assertRaises(SqlCrashConfigException):
                    ClientConfig.from_mapping(CONFIG, index)

    def test_shorter_list_fails(self):
        config = dict(CONFIG, pid_files=['/tmp/0.pid'])
        with self.assertRaisesRegex(SqlCrashConfigException, "pid_files"):
            ClientConfig.from_mapping(config, 1)

    def test_missing_field(self):
        for field in ('host', 'db_prefix', 'sock_paths', 'startup_cmd'):
            with self.subTest(field=field):
                config = {k: v for k, v in CONFIG.items() if k != field}
                with self.assertRaisesRegex(SqlCrashConfigException, field):
                    ClientConfig.from_mapping(config, 0)

    def test_port_must_be_a_number(self):
        for ports in (['abc'], [True], ['3306a']):
            with self.subTest(ports=ports):
                with self.assertRaisesRegex(SqlCrashConfigException, "Invalid port"):
                    ClientConfig.from_mapping(dict(CONFIG, ports=ports), 0)

    def test_per_instance_field_must_be_a_list(self):
        with self.assertRaises(SqlCrashConfigException):
            ClientConfig.from_mapping(dict(CONFIG, ports=3306), 0)

    def test_only_requested_instance_fields(self):
        config = {'host': 'h', 'user_name': 'u', 'passwd': 'p', 'db_prefix': 'd', 'ports': [5432]}
        client_config = ClientConfig.from_mapping(config, 0, ('ports',), require_startup_cmd=False)
        self.assertEqual('5432', client_config.port)
        self.assertIsNone(client_config.executable)

    def test_not_a_mapping(self):
        with self.assertRaises(SqlCrashConfigException):
            ClientConfig.from_mapping(['host'], 0)


class TestLoadConfig(unittest.TestCase):
    def setUp(self):
        self._tmp_dir = TemporaryDirectory()
        self.tmp_dir = self._tmp_dir.name

    def tearDown(self):
        self._tmp_dir.cleanup()

    def _write(self, content):
        path = os.path.join(self.tmp_dir, 'config.yaml')
        with open(path, 'w') as f:
            f.write(content)
        return path

    def test_load(self):
        path = self._write("host: 127.0.0.1\nports: [3306, 3307]\nstartup_cmd: ' --x'\n")
        self.assertEqual(
            {'host': '127.0.0.1', 'ports': [3306, 3307], 'startup_cmd': ' --x'}, load_config(path)
        )

    def test_missing_file(self):
        with self.assertRaisesRegex(SqlCrashConfigException, "was not found"):
            load_config(os.path.join(self.tmp_dir, 'absent.yaml'))

    def test_empty_file(self):
        with self.assertRaises(SqlCrashFileParseException) as ctx:
            load_config(self._write(""))
        self.assertEqual("The file is empty.", ctx.exception.parse_errors[0].message)

    def test_syntax_error_reports_line(self):
        with self.assertRaises(SqlCrashFileParseException) as ctx:
            load_config(self._write("host: 127.0.0.1\nports: [3306\n"))
        self.assertIsNotNone(ctx.exception.parse_errors[0].line_no)
        self.assertIn("Filename:", str(ctx.exception))

    def test_top_level_must_be_mapping(self):
        with self.assertRaises(SqlCrashFileParseException):
            load_config(self._write("- host\n- port\n"))

    def test_shipped_templates_are_valid(self):
        templates = os.path.join(os.path.dirname(__file__), os.pardir, 'sqlcrash', 'config_templates')
        mysql = ClientConfig.from_mapping(load_config(os.path.join(templates, 'default_mysql.yaml')), 1)
        self.assertEqual('3307', mysql.port)
        postgres = load_config(os.path.join(templates, 'default_postgres.yaml'))
        self.assertEqual([5432], postgres['ports'])
