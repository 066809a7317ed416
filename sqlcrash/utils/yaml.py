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
YAML loading for configuration files, with the libyaml C loader when it is installed.

Other names (``YAMLError``, ...) are looked up on the ``yaml`` module, so this module
is imported in its place: ``from sqlcrash.utils import yaml``.
"""
from typing import Any, TextIO, Union


def safe_load(stream: Union[str, TextIO]) -> Any:
    import yaml

    try:
        loader = yaml.CSafeLoader
    except AttributeError:
        loader = yaml.SafeLoader
    return yaml.load(stream, loader)


def __getattr__(name):
    import yaml

    return getattr(yaml, name)
