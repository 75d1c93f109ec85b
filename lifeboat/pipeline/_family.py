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
Family outcome aggregation.

Passengers sharing the surname and the (normalized) ticket are considered a family. The known outcomes
of the family members are aggregated into a category shared by the whole family. Passengers with the
male-coded titles are left out of the families since the women-and-children evacuation grouping is what
drives the family cohesion signal.
"""
import logging
import typing

import pandas

from lifeboat import flow
from lifeboat.schema import Derived, Passenger

LOGGER = logging.getLogger(__name__)

#: Titles never considered family members.
EXCLUDED = frozenset({'Mr', 'Mr_Child', 'Male_Other'})

NONE = 'none'
SOME = 'some'
ALL = 'all'
UNKNOWN = 'unknown'
SINGLE = 'single'

Key = tuple[str, str]


def classify(known_size: int, known_survived: int) -> str:
    """Outcome category of a family.

    Args:
        known_size: Number of members with known outcome.
        known_survived: Number of members known to have survived.

    Returns:
        One of ``unknown``, ``none``, ``all`` or ``some``.
    """
    if known_size == 0:
        return UNKNOWN
    ratio = known_survived / known_size
    if ratio == 0:
        return NONE
    if ratio == 1:
        return ALL
    return SOME


def outcomes(data: pandas.DataFrame) -> typing.Mapping[Key, str]:
    """Build the mapping of the family keys to their outcome categories.

    Only families of more than one eligible member are included.

    Args:
        data: Passenger table with the ``FamilyTitle``, ``Surname``, ``TicketKey`` and ``Survived`` columns.

    Returns:
        Mapping of (surname, ticket key) to the outcome category.
    """
    eligible = data[~data[Derived.FamilyTitle].isin(EXCLUDED)]
    labels = {}
    for key, family in eligible.groupby([Derived.Surname, Derived.TicketKey], sort=True):
        if len(family) <= 1:
            continue
        known = family[Passenger.Survived].dropna()
        labels[key] = classify(len(known), int((known == 1).sum()))
    return labels


def aggregate(data: pandas.DataFrame) -> pandas.Series:
    """Family outcome category of each passenger.

    Passengers excluded by their title or not belonging to any family get the ``single`` category.

    Args:
        data: Passenger table with the ``FamilyTitle``, ``Surname``, ``TicketKey`` and ``Survived`` columns.

    Returns:
        Series of the family outcome categories aligned with the input table.
    """
    labels = outcomes(data)
    excluded = data[Derived.FamilyTitle].isin(EXCLUDED)
    keys = zip(data[Derived.Surname], data[Derived.TicketKey])
    return pandas.Series(
        [SINGLE if x else labels.get(k, SINGLE) for x, k in zip(excluded, keys)],
        index=data.index,
        name=Derived.FamilySurvived,
    )


class FamilyAggregator(flow.Actor[pandas.DataFrame, None, pandas.DataFrame]):
    """Stateless actor deriving the ``FamilySurvived`` column.

    It only sees the outcomes present in the frame it gets applied to so the outcomes of the
    evaluation records are expected to be concealed beforehand.
    """

    def apply(self, features: pandas.DataFrame) -> pandas.DataFrame:
        families = aggregate(features)
        LOGGER.debug('Family outcomes: %s', families.value_counts().to_dict())
        return features.assign(**{Derived.FamilySurvived: families})
