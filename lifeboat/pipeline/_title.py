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
Title extraction.

The honorific is a proxy of the age, sex and social standing of a passenger. Note the title ``Mr`` was
a social marker rather than a reliable age indicator: splitting it by age for the modeling feature
correlates with *worse* survival of the young ``Mr`` passengers, which is why the child refinement only
feeds the family grouping (``FamilyTitle``) and not the modeling ``Title``.
"""
import logging
import re
import typing

import pandas

import lifeboat
from lifeboat import flow
from lifeboat.schema import Derived, Passenger

LOGGER = logging.getLogger(__name__)

PATTERN = re.compile(r'([A-Za-z]+)\.')
OTHER = 'Other'
MALE_OTHER = 'Male_Other'
FEMALE_OTHER = 'Female_Other'
ADULT_AGE = 18
CHILDREN = {'Mr': 'Mr_Child', 'Miss': 'Miss_Child'}


def extract(name: str) -> str:
    """Extract the honorific from the passenger name.

    Args:
        name: Full name (ie ``Braund, Mr. Owen Harris``).

    Returns:
        The honorific token (ie ``Mr``).

    Raises:
        lifeboat.MissingError: If the name doesn't carry any period-terminated honorific.
    """
    match = PATTERN.search(str(name))
    if not match:
        raise lifeboat.MissingError(f'No title found in name: {name!r}')
    return match.group(1)


def lump(titles: pandas.Series, min_count: int) -> pandas.Series:
    """Collapse the titles seen less than min_count times to the ``Other`` level.

    Args:
        titles: Title series of the entire population.
        min_count: Minimal frequency to keep the title level.

    Returns:
        New series with the rare levels lumped.
    """
    counts = titles.value_counts()
    kept = frozenset(counts.index[counts >= min_count])
    LOGGER.debug('Keeping title levels: %s', ', '.join(sorted(kept)))
    return titles.where(titles.isin(kept), OTHER)


def recode(titles: pandas.Series, sexes: pandas.Series) -> pandas.Series:
    """Split the ``Other`` level by sex."""
    other = titles == OTHER
    return titles.mask(other & (sexes == 'male'), MALE_OTHER).mask(other & (sexes == 'female'), FEMALE_OTHER)


def refine(titles: pandas.Series, ages: pandas.Series) -> pandas.Series:
    """Mark the young ``Mr`` and ``Miss`` passengers as ``Mr_Child`` and ``Miss_Child``.

    Passengers of unknown age are never refined. No other titles get the child variant.

    Args:
        titles: Title series.
        ages: Age series (possibly with missing values).

    Returns:
        New series with the child levels.
    """
    young = ages < ADULT_AGE
    return titles.mask(young & titles.isin(list(CHILDREN)), titles.map(CHILDREN))


class TitleExtractor(flow.Actor[pandas.DataFrame, None, pandas.DataFrame]):
    """Stateless actor deriving the ``Title`` and ``FamilyTitle`` columns.

    The rarity of a title is judged on the frame it gets applied to, which is expected to be the full
    passenger population.
    """

    def __init__(self, min_count: int = 10):
        self._min_count: int = min_count

    def apply(self, features: pandas.DataFrame) -> pandas.DataFrame:
        titles = recode(lump(features[Passenger.Name].map(extract), self._min_count), features[Passenger.Sex])
        return features.assign(
            **{Derived.Title: titles, Derived.FamilyTitle: refine(titles, features[Passenger.Age])}
        )

    def get_params(self) -> typing.Mapping[str, typing.Any]:
        return {'min_count': self._min_count}

    def set_params(self, min_count: int) -> None:  # pylint: disable=arguments-differ
        self._min_count = min_count
