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
Fare normalizer unit tests.
"""
import numpy
import pandas
import pytest

import lifeboat
from lifeboat import pipeline
from lifeboat.schema import Derived, Passenger


class TestFareNormalizer:
    """FareNormalizer actor unit tests."""

    FEATURES = pandas.DataFrame(
        {
            Passenger.Fare: [30.0, 7.25, 0.0, 90.0],
            Passenger.SibSp: [1, 0, 0, 3],
            Passenger.Parch: [1, 0, 0, 2],
        }
    )

    def test_apply(self):
        """Test the per person fare."""
        result = pipeline.FareNormalizer().apply(self.FEATURES)
        assert result[Derived.RealFare].tolist() == [10.0, 7.25, 0.0, 15.0]
        assert Derived.RealFare not in self.FEATURES.columns

    def test_positive(self, population: pandas.DataFrame):
        """Test the per person fare is positive and finite for any positive fare."""
        data = population.dropna(subset=[Passenger.Fare])
        result = pipeline.FareNormalizer().apply(data)
        positive = data[Passenger.Fare] > 0
        assert (result[Derived.RealFare][positive] > 0).all()
        assert numpy.isfinite(result[Derived.RealFare]).all()

    def test_not_imputed(self):
        """Test missing fare is an error."""
        data = self.FEATURES.assign(**{Passenger.Fare: [30.0, numpy.nan, 0.0, 90.0]})
        with pytest.raises(lifeboat.UnexpectedError, match='not imputed'):
            pipeline.FareNormalizer().apply(data)
