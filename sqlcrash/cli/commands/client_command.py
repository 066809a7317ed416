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
"""Client sub-commands"""
import sys
from typing import List, Tuple

from sqlcrash.clients import get_client
from sqlcrash.clients.base import DBClient
from sqlcrash.configuration import load_config
from sqlcrash.exceptions import SqlCrashConfigException, UnknownClientTypeException
from sqlcrash.logging_config import configure_logging

CRASH_EXIT_CODE = 3


def _initialized_client(args) -> DBClient:
    configure_logging('DEBUG' if args.verbose else 'INFO')
    try:
        client = get_client(args.type)
        client.initialize(load_config(args.config), args.index)
    except (SqlCrashConfigException, UnknownClientTypeException) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(2)
    return client


def startup_command(args):
    """Prints the startup command of a server instance"""
    client = _initialized_client(args)
    print(client.get_startup_command())


def check_alive(args):
    """Checks whether a server instance accepts connections"""
    client = _initialized_client(args)
    if client.check_alive():
        print("alive")
    else:
        print("dead")
        sys.exit(1)


def _read_queries(files) -> List[Tuple[str, bytes]]:
    if not files:
        return [("<stdin>", sys.stdin.buffer.read())]
    queries = []
    for file_path in files:
        with open(file_path, "rb") as f:
            queries.append((file_path, f.read()))
    return queries


def execute(args):
    """Runs queries in the database of one iteration"""
    client = _initialized_client(args)
    queries = _read_queries(args.file)

    crashed = False
    client.prepare_env()
    try:
        for name, query in queries:
            status, output = client.execute_with_output(query)
            print(f"{name}: {status}")
            if args.show_output:
                print(output.decode('utf-8', errors='backslashreplace'))
            if status.is_crash:
                crashed = True
                break
    finally:
        client.clean_up_env()

    if crashed:
        sys.exit(CRASH_EXIT_CODE)
