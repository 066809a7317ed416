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
"""
Loading and validation of the database client configuration.

A configuration file describes several server instances of the same backend
through parallel lists; a harness instance picks its column with an index:

.. code-block:: yaml

    host: 127.0.0.1
    user_name: root
    passwd: ""
    db_prefix: test
    ports: [3306, 3307]
    sock_paths: [/tmp/mysql0.sock, /tmp/mysql1.sock]
    ...
"""
import logging
import os
from typing import Any, Dict, Iterable, Mapping, NamedTuple, Optional

from sqlcrash.exceptions import FileSyntaxError, SqlCrashConfigException, SqlCrashFileParseException
from sqlcrash.utils import yaml

log = logging.getLogger(__name__)

REQUIRED_FIELDS = ('host', 'user_name', 'passwd', 'db_prefix')

# Maps the per-instance list in the file to the ClientConfig field it fills.
INSTANCE_FIELDS = {
    'ports': 'port',
    'executables': 'executable',
    'basedirs': 'basedir',
    'datadirs': 'datadir',
    'pid_files': 'pid_file',
    'sock_paths': 'sock_path',
}


class ClientConfig(NamedTuple):
    """Settings of a single server instance, fixed once the client is initialized."""

    host: str
    user_name: str
    passwd: str
    db_prefix: str
    port: Optional[str] = None
    executable: Optional[str] = None
    basedir: Optional[str] = None
    datadir: Optional[str] = None
    pid_file: Optional[str] = None
    sock_path: Optional[str] = None
    extra_running_parameters: str = ''

    @classmethod
    def from_mapping(
        cls,
        config: Mapping[str, Any],
        instance_index: int,
        instance_fields: Iterable[str] = tuple(INSTANCE_FIELDS),
        require_startup_cmd: bool = True,
    ) -> "ClientConfig":
        """
        Build the settings of the ``instance_index``-th server instance.

        :param config: parsed configuration, e.g. the result of :func:`load_config`
        :param instance_index: position in every per-instance list
        :param instance_fields: per-instance lists that must be present
        :param require_startup_cmd: whether ``startup_cmd`` must be present
        :raises SqlCrashConfigException: a field is missing, the index is out of range
            or the port is not a number
        """
        if not isinstance(config, Mapping):
            raise SqlCrashConfigException(f"The configuration should be a mapping, got {type(config)}")

        values: Dict[str, Any] = {}
        for field in REQUIRED_FIELDS:
            if config.get(field) is None:
                raise SqlCrashConfigException(f"Missing field '{field}' in the configuration")
            values[field] = str(config[field])

        for field in instance_fields:
            if field not in INSTANCE_FIELDS:
                raise SqlCrashConfigException(f"Unknown per-instance field '{field}'")
            values[INSTANCE_FIELDS[field]] = _get_instance_value(config, field, instance_index)

        if 'port' in values:
            try:
                int(values['port'])
            except ValueError:
                raise SqlCrashConfigException(f"Invalid port '{values['port']}' in the configuration")

        if require_startup_cmd:
            if config.get('startup_cmd') is None:
                raise SqlCrashConfigException("Missing field 'startup_cmd' in the configuration")
            values['extra_running_parameters'] = str(config['startup_cmd'])

        return cls(**values)

    @property
    def startup_command(self) -> str:
        """Command line the process manager uses to start this server instance."""
        return (
            f"{self.executable} --socket={self.sock_path} --pid_file={self.pid_file} --port={self.port}"
            f" --basedir={self.basedir} --datadir={self.datadir}{self.extra_running_parameters}"
        )


def _get_instance_value(config: Mapping[str, Any], field: str, index: int) -> str:
    values = config.get(field)
    # bool is an int, an index of True would silently pick the second server
    if (
        isinstance(values, (list, tuple))
        and isinstance(index, int)
        and not isinstance(index, bool)
        and 0 <= index < len(values)
        and values[index] is not None
    ):
        return str(values[index])
    raise SqlCrashConfigException(f"Invalid index or missing field '{field}' in the configuration")


def load_config(file_path: str) -> Dict[str, Any]:
    """
    Parse a YAML configuration file.

    :param file_path: The location of the file that will be processed.
    :type file_path: str
    :return: the top level mapping of the file
    """
    if not os.path.exists(file_path):
        raise SqlCrashConfigException(f"File {file_path} was not found.")

    log.debug("Parsing file: %s", file_path)

    with open(file_path) as f:
        content = f.read()

    if not content.strip():
        raise SqlCrashFileParseException(
            "Failed to load the configuration file.",
            file_path=file_path,
            parse_errors=[FileSyntaxError(line_no=1, message="The file is empty.")],
        )
    try:
        config = yaml.safe_load(content)
    except yaml.YAMLError as e:
        mark = getattr(e, 'problem_mark', None)
        raise SqlCrashFileParseException(
            "Failed to load the configuration file.",
            file_path=file_path,
            parse_errors=[FileSyntaxError(line_no=mark.line + 1 if mark else None, message=str(e))],
        )
    if not isinstance(config, dict):
        raise SqlCrashFileParseException(
            "Failed to load the configuration file.",
            file_path=file_path,
            parse_errors=[FileSyntaxError(line_no=1, message="The file should contain the object.")],
        )

    log.debug("Loaded %d configuration keys from %s", len(config), file_path)
    return config
