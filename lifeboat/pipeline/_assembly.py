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
Feature table assembly.
"""
import logging
import typing

import pandas
from sklearn import preprocessing

from lifeboat import flow
from lifeboat.schema import Derived, Passenger

LOGGER = logging.getLogger(__name__)

#: The modeling table columns (in order).
COLUMNS = (Derived.Title, Derived.FamilySurvived, Derived.RealFare, Passenger.Embarked, Derived.CabinRecorded)
CATEGORICAL = (Derived.Title, Derived.FamilySurvived, Passenger.Embarked, Derived.CabinRecorded)
NUMERIC = (Derived.RealFare,)

#: Reserved level for categories not seen during training.
UNKNOWN = 'unknown'


class Assembler(flow.Actor[pandas.DataFrame, pandas.Series, pandas.DataFrame]):
    """Stateful actor selecting the modeling view of the derived passenger table.

    Categorical columns are turned into unordered categoricals with the levels seen in training plus the
    reserved ``unknown`` level (taken by any value not seen in training). Numeric columns are
    standardized using the training statistics.
    """

    def __init__(self):
        self._levels: typing.Optional[dict[str, list[str]]] = None
        self._scaler: typing.Optional[preprocessing.StandardScaler] = None

    def train(self, features: pandas.DataFrame, labels: pandas.Series, /) -> None:
        self._levels = {c: sorted(set(features[c].dropna().astype(str)) | {UNKNOWN}) for c in CATEGORICAL}
        self._scaler = preprocessing.StandardScaler().fit(features[list(NUMERIC)])
        LOGGER.debug('Trained levels: %s', self._levels)

    def apply(self, features: pandas.DataFrame) -> pandas.DataFrame:
        if self._levels is None or self._scaler is None:
            raise RuntimeError('Actor not trained')
        result = {}
        for column in COLUMNS:
            if column in self._levels:
                levels = self._levels[column]
                values = features[column].astype(str).where(features[column].notna(), UNKNOWN)
                unseen = ~values.isin(levels)
                if unseen.any():
                    LOGGER.info('Unseen %s levels: %s', column, ', '.join(sorted(set(values[unseen]))))
                result[column] = pandas.Categorical(values.where(~unseen, UNKNOWN), categories=levels)
        scaled = self._scaler.transform(features[list(NUMERIC)])
        for index, column in enumerate(NUMERIC):
            result[column] = scaled[:, index]
        return pandas.DataFrame(result, index=features.index)[list(COLUMNS)]
