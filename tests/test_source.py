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
Source and schema unit tests.
"""
import pathlib

import numpy
import pandas
import pytest

import lifeboat
from lifeboat import schema, source
from lifeboat.schema import Passenger


class TestValidate:
    """Schema validation unit tests."""

    def test_valid(self, trainset: pandas.DataFrame):
        """Test valid table passes."""
        assert schema.validate(trainset) is trainset

    def test_absent(self, trainset: pandas.DataFrame):
        """Test absent column is an error."""
        with pytest.raises(lifeboat.MissingError, match='Cabin'):
            schema.validate(trainset.drop(columns=Passenger.Cabin))

    def test_missing(self, trainset: pandas.DataFrame):
        """Test missing required field is an error."""
        data = trainset.copy()
        data.loc[3, Passenger.Name] = numpy.nan
        with pytest.raises(lifeboat.MissingError, match='Name'):
            schema.validate(data)

    def test_sex(self, trainset: pandas.DataFrame):
        """Test unknown sex is an error."""
        data = trainset.copy()
        data.loc[3, Passenger.Sex] = 'unknown'
        with pytest.raises(lifeboat.UnexpectedError):
            schema.validate(data)


class TestLoad:
    """Loading unit tests."""

    def test_trainset(self, trainset_csv: pathlib.Path, trainset: pandas.DataFrame):
        """Test loading only the labelled data."""
        data = source.load(trainset_csv)
        assert len(data) == len(trainset)
        assert data[Passenger.Survived].notna().all()

    def test_testset(self, trainset_csv: pathlib.Path, testset_csv: pathlib.Path, population: pandas.DataFrame):
        """Test loading the whole population."""
        data = source.load(trainset_csv, testset_csv)
        assert len(data) == len(population)
        assert data[Passenger.Survived].isna().sum() == population[Passenger.Survived].isna().sum()
        assert data.index.is_unique

    def test_unlabelled(self, testset_csv: pathlib.Path):
        """Test the trainset needs labels."""
        with pytest.raises(lifeboat.MissingError, match='Survived'):
            source.load(testset_csv)


class TestSplit:
    """Splitting unit tests."""

    def test_split(self, population: pandas.DataFrame):
        """Test the stratified split of the labelled records."""
        train, test = source.split(population, train_size=0.7, seed=42)
        labelled = population.index[population[Passenger.Survived].notna()]
        assert sorted(train.union(test)) == sorted(labelled)
        assert not train.intersection(test).size
        assert len(train) == 42
        ratio = population[Passenger.Survived].loc[labelled].mean()
        assert population[Passenger.Survived].loc[train].mean() == pytest.approx(ratio, abs=0.05)

    def test_deterministic(self, population: pandas.DataFrame):
        """Test the split is reproducible with the same seed."""
        first = source.split(population, seed=1)
        second = source.split(population, seed=1)
        assert first[0].equals(second[0])
        assert first[1].equals(second[1])


def test_conceal(population: pandas.DataFrame):
    """Test concealing of the outcomes."""
    original = population.copy()
    result = source.conceal(population, pandas.Index([0, 1]))
    assert result[Passenger.Survived].iloc[:2].isna().all()
    assert result[Passenger.Survived].iloc[2:].equals(population[Passenger.Survived].iloc[2:].astype(float))
    pandas.testing.assert_frame_equal(population, original)


class TestExtract:
    """Label extraction unit tests."""

    def test_extract(self, trainset: pandas.DataFrame):
        """Test the features and labels split."""
        features, labels = source.extract(trainset.assign(**{Passenger.Survived: trainset[Passenger.Survived] * 1.0}))
        assert Passenger.Survived not in features.columns
        assert labels.dtype == int
        assert labels.tolist() == trainset[Passenger.Survived].tolist()

    def test_missing(self, population: pandas.DataFrame):
        """Test missing labels are an error."""
        with pytest.raises(lifeboat.MissingError, match='labels'):
            source.extract(population)
