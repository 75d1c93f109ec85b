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
Lifeboat logging.
"""
import configparser
import itertools
import logging
import pathlib
import typing
from logging import config

from lifeboat import conf

LOGGER = logging.getLogger(__name__)
DEFAULTS = dict(app_name=conf.APPNAME, log_path=f'./{conf.APPNAME}.log')


def setup(*path: pathlib.Path, **defaults: typing.Any) -> None:
    """Setup logger according to the params."""
    parser = configparser.ConfigParser(DEFAULTS | defaults)
    tried = set()
    used = parser.read(
        p
        for p in (
            (b / conf.CONFIG[conf.SECTION_LOGGING][conf.OPT_CONFIG]).resolve()
            for b in itertools.chain(conf.PATH, path)
        )
        if not (p in tried or tried.add(p))
    )
    config.fileConfig(parser, disable_existing_loggers=False)
    logging.captureWarnings(capture=True)
    LOGGER.debug('Logging configs: %s', ', '.join(used) or 'none')
    LOGGER.debug('Application configs: %s', ', '.join(str(s) for s in conf.CONFIG.sources) or 'none')
    for src, err in conf.CONFIG.errors.items():
        LOGGER.warning('Error parsing config %s: %s', src, err)


conf.CONFIG.subscribe(setup)  # reload logging config upon main config change to reflect potential new values
