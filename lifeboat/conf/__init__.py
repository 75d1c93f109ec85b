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

"""Lifeboat configuration
"""
import os
import pathlib
import types
import typing

import tomli

import lifeboat


class Config(dict):
    """Config parser implementation."""

    def __init__(self, defaults: typing.Mapping[str, typing.Any], *paths: pathlib.Path):
        super().__init__()
        self._sources: list[pathlib.Path] = []
        self._errors: dict[pathlib.Path, Exception] = {}
        self._notifiers: list[typing.Callable[[], None]] = []
        self.update(defaults)
        for src in paths:
            self.read(src)

    def subscribe(self, notifier: typing.Callable[[], None]) -> None:
        """Register a callback to be called upon configuration updates.

        Args:
            notifier: Simple callable to be executed when config gets updated.
        """
        self._notifiers.append(notifier)

    def update(self, other: typing.Optional[typing.Mapping[str, typing.Any]] = None, **kwargs) -> None:
        """Config gets updated by recursive merge with right (new) scalar values overwriting left (old) ones.

        Args:
            other: Another mapping with config values to be merged with our config.
            **kwargs: Other values provided as keyword arguments.
        """

        def merge(left: typing.Mapping, right: typing.Mapping) -> typing.Mapping[str, typing.Any]:
            """Recursive merge of two dictionaries with right-to-left precedence. Lists are replaced as a whole
            since they carry the search space values.

            Args:
                left: Left dictionary to be merged.
                right: Right dictionary to be merged.

            Returns:
                Merged dictionary.
            """
            # pylint: disable=isinstance-second-argument-not-valid-type
            result = {}
            common = set(left).intersection(right)
            for key in set(left).union(right):
                if key in common and isinstance(left[key], typing.Mapping) and isinstance(right[key], typing.Mapping):
                    value = merge(left[key], right[key])
                elif key in right:
                    value = right[key]
                else:
                    value = left[key]
                result[key] = value
            return types.MappingProxyType(result)

        super().update(merge(merge(self, other or {}), kwargs))
        for notifier in self._notifiers:
            notifier()

    @property
    def sources(self) -> typing.Iterable[pathlib.Path]:
        """Get the sources files used by this parser.

        Returns:
            Source files.
        """
        return tuple(self._sources)

    @property
    def errors(self) -> typing.Mapping[pathlib.Path, Exception]:
        """Errors captured during parsing.

        Returns:
            Mapping between files and the captured errors.
        """
        return types.MappingProxyType(self._errors)

    def read(self, path: typing.Union[str, pathlib.Path]) -> None:
        """Read and merge config from given file.

        Args:
            path: Path to file to parse.
        """
        path = pathlib.Path(path)
        try:
            with open(path, 'rb') as cfg:
                self.update(tomli.load(cfg))
        except FileNotFoundError:  # not an error (ignore)
            pass
        except PermissionError as err:  # soft error (warn)
            self._errors[path] = err
        except ValueError as err:  # hard error (abort)
            raise lifeboat.InvalidError(f'Invalid config file {path}: {err}') from err
        else:
            self._sources.append(path)


SECTION_SPLIT = 'SPLIT'
SECTION_TITLE = 'TITLE'
SECTION_FAMILY = 'FAMILY'
SECTION_SEARCH = 'SEARCH'
SECTION_LOGGING = 'LOGGING'
OPT_TRAIN_SIZE = 'train_size'
OPT_SEED = 'seed'
OPT_MIN_COUNT = 'min_count'
OPT_WILDCARD = 'wildcard'
OPT_FOLDS = 'folds'
OPT_BUDGET = 'budget'
OPT_NJOBS = 'n_jobs'
OPT_SPACE = 'space'
OPT_CONFIG = 'config'

DEFAULTS = {
    # all static defaults should go rather to the ./config.toml (in this package)
    SECTION_LOGGING: {OPT_CONFIG: 'logging.ini'},
}

APPNAME = 'lifeboat'
SYSDIR = pathlib.Path('/etc') / APPNAME
USRDIR = pathlib.Path(os.getenv(f'{APPNAME.upper()}_HOME', pathlib.Path.home() / f'.{APPNAME}'))
PATH = pathlib.Path(__file__).parent, SYSDIR, USRDIR
APPCFG = 'config.toml'

CONFIG = Config(DEFAULTS, *(p / APPCFG for p in PATH))


def get(section: str, option: str) -> typing.Any:
    """Get the config value.

    Args:
        section: Config file section.
        option: Option key.

    Returns:
        Config value.
    """
    try:
        return CONFIG[section][option]
    except KeyError as err:
        raise lifeboat.MissingError(f'Config option {section}.{option} not set') from err
