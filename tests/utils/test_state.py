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

from sqlcrash.utils.state import ExecutionStatus, QueryResult


class TestExecutionStatus(unittest.TestCase):
    def test_values_are_the_driver_strings(self):
        self.assertEqual(
            ["kNormal", "kSyntaxError", "kSemanticError", "kServerCrash"],
            [status.value for status in ExecutionStatus],
        )

    def test_str_returns_value(self):
        self.assertEqual("kServerCrash", str(ExecutionStatus.SERVER_CRASH))
        self.assertEqual("kNormal", f"{ExecutionStatus.NORMAL}")

    def test_compares_equal_to_string(self):
        assert ExecutionStatus.SYNTAX_ERROR == "kSyntaxError"
        assert ExecutionStatus("kSemanticError") is ExecutionStatus.SEMANTIC_ERROR

    def test_only_server_crash_is_crash(self):
        self.assertEqual(
            [ExecutionStatus.SERVER_CRASH], [status for status in ExecutionStatus if status.is_crash]
        )

    def test_query_result_defaults_to_empty_output(self):
        result = QueryResult(ExecutionStatus.SERVER_CRASH)
        self.assertEqual(b"", result.output)
        status, output = result
        self.assertIs(ExecutionStatus.SERVER_CRASH, status)
