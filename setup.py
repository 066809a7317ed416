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
"""Setup.py for the sqlcrash project."""
import glob
import logging
import os
import unittest
from os.path import dirname
from typing import List

from setuptools import Command, find_packages, setup

logger = logging.getLogger(__name__)

version = '0.3.0'

my_dir = dirname(__file__)


def sqlcrash_test_suite() -> unittest.TestSuite:
    """Test suite for sqlcrash tests"""
    test_loader = unittest.TestLoader()
    test_suite = test_loader.discover(os.path.join(my_dir, 'tests'), pattern='test_*.py')
    return test_suite


class CleanCommand(Command):
    """
    Command to tidy up the project root.
    Registered as cmdclass in setup() so it can be called with ``python setup.py extra_clean``.
    """

    description = "Tidy up the project root"
    user_options: List[str] = []

    def initialize_options(self):
        """Set default values for options."""

    def finalize_options(self):
        """Set final values for options."""

    @staticmethod
    def rm_all_files(files: List[str]):
        """Remove all files from the list"""
        for file in files:
            try:
                os.remove(file)
            except OSError as e:
                logger.warning("Error when removing %s: %s", file, e)

    def run(self):
        """Remove temporary files and directories."""
        os.chdir(my_dir)
        self.rm_all_files(glob.glob('./build/*'))
        self.rm_all_files(glob.glob('./**/__pycache__/*', recursive=True))
        self.rm_all_files(glob.glob('./**/*.pyc', recursive=True))
        self.rm_all_files(glob.glob('./dist/*'))
        self.rm_all_files(glob.glob('./*.egg-info'))


# Start dependencies group
mysql = [
    'mysqlclient>=1.3.6',
]
postgres = [
    'psycopg2-binary>=2.7.4',
]
# End dependencies group

devel = [
    'pytest',
    'pytest-cov',
]

INSTALL_REQUIREMENTS = [
    'argcomplete>=1.10',
    'colorlog>=4.0.2',
    'pyyaml>=5.1',
    *mysql,
    *postgres,
]

EXTRAS_REQUIREMENTS = {
    'devel': devel,
    'mysql': mysql,
    'postgres': postgres,
}


def do_setup() -> None:
    """Perform the sqlcrash package setup."""
    setup(
        name='sqlcrash',
        description='Execution and outcome classification layer of a crash oriented SQL fuzzing harness',
        license='Apache License 2.0',
        version=version,
        packages=find_packages(include=['sqlcrash', 'sqlcrash.*']),
        package_data={'sqlcrash': ['config_templates/*.yaml']},
        python_requires='>=3.7',
        install_requires=INSTALL_REQUIREMENTS,
        extras_require=EXTRAS_REQUIREMENTS,
        entry_points={'console_scripts': ['sqlcrash = sqlcrash.__main__:main']},
        cmdclass={
            'extra_clean': CleanCommand,
        },
        test_suite='setup.sqlcrash_test_suite',
    )


if __name__ == "__main__":
    do_setup()
