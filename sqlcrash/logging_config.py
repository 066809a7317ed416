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
"""sqlcrash logging settings"""
import logging
from copy import deepcopy
from logging.config import dictConfig
from typing import Any, Dict

LOG_LEVEL: str = 'INFO'

LOG_FORMAT: str = '[%(asctime)s] {%(filename)s:%(lineno)d} %(levelname)s - %(message)s'

COLORED_LOG_FORMAT: str = (
    '[%(blue)s%(asctime)s%(reset)s] {%(blue)s%(filename)s:%(reset)s%(lineno)d} '
    '%(log_color)s%(levelname)s%(reset)s - %(log_color)s%(message)s%(reset)s'
)

DEFAULT_LOGGING_CONFIG: Dict[str, Any] = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'sqlcrash': {'format': LOG_FORMAT},
        'sqlcrash_coloured': {
            'format': COLORED_LOG_FORMAT,
            'class': 'sqlcrash.utils.log.colored_log.CustomTTYColoredFormatter',
        },
    },
    'handlers': {
        'console': {
            'class': 'sqlcrash.utils.log.logging_mixin.RedirectStderrHandler',
            'formatter': 'sqlcrash_coloured',
        },
    },
    'loggers': {
        'sqlcrash': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
    },
}

log = logging.getLogger(__name__)


def configure_logging(level: str = LOG_LEVEL, colored: bool = True) -> Dict[str, Any]:
    """
    Apply the default logging configuration to the ``sqlcrash`` logger tree.

    :param level: level name of the ``sqlcrash`` logger
    :param colored: use the colour formatter on the console handler
    :return: the applied configuration
    """
    logging_config = deepcopy(DEFAULT_LOGGING_CONFIG)
    logging_config['loggers']['sqlcrash']['level'] = level.upper()
    if not colored:
        logging_config['handlers']['console']['formatter'] = 'sqlcrash'

    try:
        dictConfig(logging_config)
    except ValueError as e:
        log.warning('Unable to load the config, contains a configuration error.')
        # When there is an error in the config, escalate the exception
        # otherwise sqlcrash would silently fall back on the default config
        raise e

    return logging_config
