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

import io
import logging
import sys
import unittest
from unittest import mock

from sqlcrash.utils.log.colored_log import BOLD_OFF, BOLD_ON, CustomTTYColoredFormatter
from sqlcrash.utils.log.logging_mixin import LoggingMixin, RedirectStderrHandler


class DummyClass(LoggingMixin):
    pass


class TestLoggingMixin(unittest.TestCase):
    def test_logger_name(self):
        self.assertEqual(DummyClass().log.name, f"{__name__}.DummyClass")

    def test_logger_is_cached(self):
        obj = DummyClass()
        self.assertIs(obj.log, obj.log)


class TestRedirectStderrHandler(unittest.TestCase):
    def test_follows_current_stderr(self):
        handler = RedirectStderrHandler()
        replacement = io.StringIO()
        with mock.patch.object(sys, 'stderr', replacement):
            self.assertIs(handler.stream, replacement)
            handler.handle(logging.makeLogRecord({'msg': 'database %s dropped', 'args': ('fuzz1',)}))

        self.assertEqual("database fuzz1 dropped\n", replacement.getvalue())


class TestCustomTTYColoredFormatter(unittest.TestCase):
    def _record(self):
        return logging.LogRecord(
            'sqlcrash', logging.WARNING, __file__, 1, "Statement %s failed: %d", ('DROP', 1064), None
        )

    def test_plain_when_not_a_tty(self):
        stream = io.StringIO()
        formatter = CustomTTYColoredFormatter(fmt='%(message)s', stream=stream)
        formatter.stream = stream
        message = formatter.format(self._record())
        self.assertTrue(message.startswith("Statement DROP failed: 1064"))
        self.assertNotIn(BOLD_ON, message)

    def test_bold_args_on_a_tty(self):
        stream = mock.MagicMock()
        stream.isatty.return_value = True
        formatter = CustomTTYColoredFormatter(fmt='%(message)s')
        formatter.stream = stream
        message = formatter.format(self._record())
        self.assertIn(BOLD_ON + "DROP" + BOLD_OFF, message)
        self.assertIn("1064", message)
