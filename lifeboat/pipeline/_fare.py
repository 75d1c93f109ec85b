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
Per person fare.
"""
import pandas

import lifeboat
from lifeboat import flow
from lifeboat.schema import Derived, Passenger


def party(data: pandas.DataFrame) -> pandas.Series:
    """Number of people sharing the ticket fare (self plus siblings/spouses plus parents/children)."""
    return 1 + data[Passenger.SibSp] + data[Passenger.Parch]


class FareNormalizer(flow.Actor[pandas.DataFrame, None, pandas.DataFrame]):
    """Stateless actor deriving the ``RealFare`` as the ticket fare divided by the party size.

    Missing fares need to be imputed upstream.
    """

    def apply(self, features: pandas.DataFrame) -> pandas.DataFrame:
        fare = features[Passenger.Fare]
        if fare.isna().any():
            missing = list(features.index[fare.isna()])
            raise lifeboat.UnexpectedError(f'{Passenger.Fare} not imputed for records: {missing}')
        return features.assign(**{Derived.RealFare: fare / party(features)})
