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
import logging
import sys
from logging import Handler, Logger, StreamHandler


class LoggingMixin:
    """
    Convenience super-class to have a logger configured with the class name
    """

    @property
    def log(self) -> Logger:
        """
        Returns a logger.
        """
        try:
            return self._log  # type: ignore
        except AttributeError:
            self._log = logging.getLogger(self.__class__.__module__ + '.' + self.__class__.__name__)
            return self._log


class RedirectStderrHandler(StreamHandler):
    """
    StreamHandler writing to whatever sys.stderr is when a record is emitted,
    so output captured by a test or a calling harness also receives the logs.
    """

    # pylint: disable=super-init-not-called
    def __init__(self):
        # StreamHandler tries to set self.stream
        Handler.__init__(self)  # pylint: disable=non-parent-init-called

    @property
    def stream(self):
        return sys.stderr
