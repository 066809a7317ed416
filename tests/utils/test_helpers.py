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

from sqlcrash.utils import yaml
from sqlcrash.utils.module_loading import import_string
from sqlcrash.utils.state import ExecutionStatus


class TestImportString(unittest.TestCase):
    def test_import_attribute(self):
        self.assertIs(import_string('sqlcrash.utils.state.ExecutionStatus'), ExecutionStatus)

    def test_not_a_module_path(self):
        with self.assertRaisesRegex(ImportError, "doesn't look like a module path"):
            import_string('sqlcrash')

    def test_missing_attribute(self):
        with self.assertRaisesRegex(ImportError, 'does not define a "Missing"'):
            import_string('sqlcrash.utils.state.Missing')


class TestYaml(unittest.TestCase):
    def test_safe_load(self):
        self.assertEqual(yaml.safe_load("ports: [3306, 3307]\nhost: localhost\n"),
                         {'ports': [3306, 3307], 'host': 'localhost'})

    def test_safe_load_rejects_python_tags(self):
        with self.assertRaises(yaml.YAMLError):
            yaml.safe_load("!!python/object/apply:os.system ['true']")
