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
Global Lifeboat unit tests fixtures.
"""
import pathlib

import numpy
import pandas
import pytest

from lifeboat import evaluation
from lifeboat.schema import Passenger

TITLES = (('Mr', 'male'), ('Mrs', 'female'), ('Miss', 'female'), ('Master', 'male'), ('Mr', 'male'), ('Miss', 'female'))
RARE = {13: ('Dr', 'male'), 26: ('Rev', 'male'), 41: ('Countess', 'female')}


def passengers(start: int, stop: int) -> pandas.DataFrame:
    """Synthetic passengers generator.

    Every three consecutive passengers travel on a ticket differing only in the last character and share the
    surname.
    """
    rows = []
    for i in range(start, stop):
        title, sex = RARE.get(i, TITLES[i % len(TITLES)])
        pclass = 1 + i % 3
        rows.append(
            {
                Passenger.PassengerId: i + 1,
                Passenger.Survived: int(sex == 'female') ^ int(i % 7 == 0),
                Passenger.Pclass: pclass,
                Passenger.Name: f'Family{i // 3}, {title}. Person{i}',
                Passenger.Sex: sex,
                Passenger.Age: numpy.nan if i % 5 == 4 else float(5 + (i * 7) % 60),
                Passenger.SibSp: 1 if i % 3 else 0,
                Passenger.Parch: i % 2,
                Passenger.Ticket: f'{1000 + i // 3}{i % 3}',
                Passenger.Fare: numpy.nan if i == 7 else 7.25 * (1 + i % 5) * (4 - pclass),
                Passenger.Cabin: f'C{i}' if i % 4 == 0 else numpy.nan,
                Passenger.Embarked: numpy.nan if i == 11 else 'SSCQ'[i % 4],
            }
        )
    return pandas.DataFrame(rows)


@pytest.fixture(scope='session')
def trainset() -> pandas.DataFrame:
    """Labelled passengers fixture."""
    return passengers(0, 60)


@pytest.fixture(scope='session')
def testset() -> pandas.DataFrame:
    """Unlabelled passengers fixture."""
    return passengers(60, 72).drop(columns=Passenger.Survived)


@pytest.fixture(scope='session')
def population(trainset: pandas.DataFrame, testset: pandas.DataFrame) -> pandas.DataFrame:
    """Whole population fixture."""
    return pandas.concat([trainset, testset.assign(**{Passenger.Survived: numpy.nan})], ignore_index=True)


@pytest.fixture(scope='function')
def trainset_csv(tmp_path: pathlib.Path, trainset: pandas.DataFrame) -> pathlib.Path:
    """Labelled passengers CSV file fixture."""
    path = tmp_path / 'train.csv'
    trainset.to_csv(path, index=False)
    return path


@pytest.fixture(scope='function')
def testset_csv(tmp_path: pathlib.Path, testset: pandas.DataFrame) -> pathlib.Path:
    """Unlabelled passengers CSV file fixture."""
    path = tmp_path / 'test.csv'
    testset.to_csv(path, index=False)
    return path


@pytest.fixture(scope='function')
def classifier() -> evaluation.Classifier:
    """Small classifier fixture."""
    return evaluation.Classifier(
        space={'n_estimators': [10, 20], 'max_depth': [2, 3]}, folds=2, budget=2, seed=42, n_jobs=1
    )
