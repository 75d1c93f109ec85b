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
Missing values policy.
"""
import collections
import logging
import typing

import pandas

import lifeboat
from lifeboat import flow
from lifeboat.schema import Derived, Passenger

LOGGER = logging.getLogger(__name__)

RECORDED = 'yes'
UNRECORDED = 'no'

#: Grouping levels used for the fare median from the most specific one down to the class-wide one.
FARE_GROUPS = ((Passenger.Pclass, Passenger.SibSp, Passenger.Parch), (Passenger.Pclass,))


def mode(values: pandas.Series) -> typing.Any:
    """Most frequent value of the given series.

    Ties are resolved in favour of the value encountered first, which makes the result depend on
    the row order when the mode is not unique.

    Args:
        values: Series to find the mode of (missing values are ignored).

    Returns:
        The most frequent value.
    """
    counts = collections.Counter(values.dropna())
    if not counts:
        raise lifeboat.MissingError(f'No values to find {values.name} mode from')
    return max(counts, key=counts.get)


def impute_fare(data: pandas.DataFrame) -> pandas.Series:
    """Fill the missing fares with the median fare of passengers in the same class travelling with the same
    number of siblings/spouses and parents/children.

    Groups with no known fare fall back to the class-wide median and eventually to the population median.

    Args:
        data: Passenger table.

    Returns:
        Fare series with no missing values.
    """
    fare = data[Passenger.Fare]
    for group in FARE_GROUPS:
        fare = fare.fillna(data.groupby(list(group))[Passenger.Fare].transform('median'))
    fare = fare.fillna(data[Passenger.Fare].median())
    if fare.isna().any():
        raise lifeboat.MissingError('No fare to impute from')
    return fare


class Imputer(flow.Actor[pandas.DataFrame, None, pandas.DataFrame]):
    """Stateless actor applying the missing values policy over the full passenger population:

    * cabin becomes a yes/no presence indicator (the cabin identifier itself is dropped)
    * missing embarkation port is filled with the population mode
    * missing fare is filled with the grouped median (see :func:`impute_fare`)
    * age is left untouched
    """

    def apply(self, features: pandas.DataFrame) -> pandas.DataFrame:
        result = features.drop(columns=Passenger.Cabin)
        result[Derived.CabinRecorded] = features[Passenger.Cabin].notna().map({True: RECORDED, False: UNRECORDED})
        embarked = features[Passenger.Embarked]
        if embarked.isna().any():
            port = mode(embarked)
            LOGGER.info('Imputing %d missing %s values with %s', embarked.isna().sum(), Passenger.Embarked, port)
            result[Passenger.Embarked] = embarked.fillna(port)
        if features[Passenger.Fare].isna().any():
            LOGGER.info('Imputing %d missing %s values', features[Passenger.Fare].isna().sum(), Passenger.Fare)
            result[Passenger.Fare] = impute_fare(features)
        return result
