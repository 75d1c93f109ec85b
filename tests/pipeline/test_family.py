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
Family outcome aggregation unit tests.
"""
import typing

import numpy
import pandas
import pytest

from lifeboat import pipeline
from lifeboat.pipeline import _family
from lifeboat.schema import Derived, Passenger


def family(
    surname: str, ticket: str, titles: typing.Sequence[str], survived: typing.Sequence[float]
) -> pandas.DataFrame:
    """Helper for creating the family records."""
    return pandas.DataFrame(
        {
            Derived.Surname: surname,
            Derived.TicketKey: ticket,
            Derived.FamilyTitle: list(titles),
            Passenger.Survived: list(survived),
        }
    )


@pytest.mark.parametrize(
    'size, survived, label',
    [(0, 0, 'unknown'), (3, 0, 'none'), (3, 3, 'all'), (4, 2, 'some'), (3, 1, 'some'), (1, 1, 'all')],
)
def test_classify(size: int, survived: int, label: str):
    """Test the family outcome classification."""
    assert _family.classify(size, survived) == label


class TestAggregate:
    """Family aggregation unit tests."""

    def test_some(self):
        """Test a family with mixed known outcomes."""
        data = family('Smith', 'A123X', ['Mrs', 'Miss', 'Master', 'Miss_Child'], [1, 0, 1, 0])
        assert _family.aggregate(data).tolist() == ['some'] * 4

    def test_unknown(self):
        """Test a family with no known outcome doesn't divide by zero."""
        data = family('Jones', 'B12X', ['Mrs', 'Miss', 'Master'], [numpy.nan] * 3)
        assert _family.aggregate(data).tolist() == ['unknown'] * 3

    def test_partially_known(self):
        """Test the unknown outcomes are ignored in the ratio."""
        data = family('Jones', 'B12X', ['Mrs', 'Miss', 'Master'], [1, numpy.nan, 1])
        assert _family.aggregate(data).tolist() == ['all'] * 3

    def test_excluded(self):
        """Test the male-coded titles are always single."""
        data = family(
            'Smith', 'A123X', ['Mr', 'Mrs', 'Mr_Child', 'Miss', 'Male_Other'], [0, 1, 0, 1, numpy.nan]
        )
        assert _family.aggregate(data).tolist() == ['single', 'all', 'single', 'all', 'single']

    def test_singles(self):
        """Test family of one eligible member is single."""
        data = pandas.concat(
            [
                family('Smith', 'A123X', ['Mr', 'Mrs'], [0, 1]),
                family('Smith', 'C77X', ['Miss'], [1]),
                family('Brown', 'A123X', ['Miss'], [0]),
            ],
            ignore_index=True,
        )
        assert _family.aggregate(data).tolist() == ['single'] * 4

    def test_grouping(self):
        """Test families are keyed by both the surname and the ticket."""
        data = pandas.concat(
            [
                family('Smith', 'A123X', ['Mrs', 'Miss'], [1, 1]),
                family('Smith', 'B456X', ['Mrs', 'Miss'], [0, 0]),
                family('Brown', 'A123X', ['Mrs', 'Master'], [0, 1]),
            ],
            ignore_index=True,
        )
        data = data.sample(frac=1, random_state=1)
        result = _family.aggregate(data)
        assert result.index.equals(data.index)
        expected = {('Smith', 'A123X'): 'all', ('Smith', 'B456X'): 'none', ('Brown', 'A123X'): 'some'}
        for key, label in zip(zip(data[Derived.Surname], data[Derived.TicketKey]), result):
            assert expected[key] == label

    def test_outcomes(self):
        """Test the key-label mapping only holds the real families."""
        data = pandas.concat(
            [family('Smith', 'A123X', ['Mrs', 'Miss'], [1, 0]), family('Brown', 'A123X', ['Mrs', 'Mr'], [1, 0])],
            ignore_index=True,
        )
        assert _family.outcomes(data) == {('Smith', 'A123X'): 'some'}


class TestFamilyAggregator:
    """FamilyAggregator actor unit tests."""

    def test_apply(self):
        """Test the family column derivation."""
        data = family('Smith', 'A123X', ['Mrs', 'Miss', 'Mr'], [1, 1, 0])
        result = pipeline.FamilyAggregator().apply(data)
        assert result[Derived.FamilySurvived].tolist() == ['all', 'all', 'single']
        assert Derived.FamilySurvived not in data.columns
