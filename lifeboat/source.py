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
Passenger data source.

Loading, partitioning and label handling of the passenger table.
"""
import logging
import os
import typing

import numpy
import pandas
from sklearn import model_selection

import lifeboat
from lifeboat import schema
from lifeboat.schema import Passenger

LOGGER = logging.getLogger(__name__)

Path = typing.Union[str, os.PathLike]


def load(trainset: Path, testset: typing.Optional[Path] = None) -> pandas.DataFrame:
    """Load the passenger population.

    The optional testset is the unlabelled part of the population (it gets an empty ``Survived`` column).

    Args:
        trainset: Path to the labelled CSV file.
        testset: Optional path to the unlabelled CSV file.

    Returns:
        Validated passenger table of the whole population.
    """
    frames = [pandas.read_csv(trainset)]
    if Passenger.Survived not in frames[0].columns:
        raise lifeboat.MissingError(f'No {Passenger.Survived} column in {trainset}')
    if testset:
        test = pandas.read_csv(testset)
        frames.append(test.assign(**{Passenger.Survived: numpy.nan}))
    data = pandas.concat(frames, ignore_index=True)
    LOGGER.info('Loaded %d passengers (%d labelled)', len(data), data[Passenger.Survived].notna().sum())
    return schema.validate(data)


def split(
    data: pandas.DataFrame, train_size: float = 0.7, seed: typing.Optional[int] = None
) -> tuple[pandas.Index, pandas.Index]:
    """Stratified split of the labelled records into the training and evaluation partitions.

    Args:
        data: Passenger table.
        train_size: Fraction of the labelled records to put into the training partition.
        seed: Random state for reproducible split.

    Returns:
        Tuple of sorted training and evaluation indices.
    """
    labelled = data[data[Passenger.Survived].notna()]
    train, test = model_selection.train_test_split(
        labelled.index, train_size=train_size, random_state=seed, stratify=labelled[Passenger.Survived]
    )
    LOGGER.debug('Split %d labelled records into %d training and %d evaluation', len(labelled), len(train), len(test))
    return pandas.Index(sorted(train)), pandas.Index(sorted(test))


def conceal(data: pandas.DataFrame, index: pandas.Index) -> pandas.DataFrame:
    """Copy of the table with the outcome of the given records removed.

    Args:
        data: Passenger table.
        index: Records whose outcome to conceal.

    Returns:
        New passenger table.
    """
    result = data.copy()
    result[Passenger.Survived] = result[Passenger.Survived].astype(float)
    result.loc[index, Passenger.Survived] = numpy.nan
    return result


def extract(data: pandas.DataFrame) -> tuple[pandas.DataFrame, pandas.Series]:
    """Split the table into the features and the labels.

    Args:
        data: Labelled passenger table.

    Returns:
        Features table without the label column and the integer label series.
    """
    labels = data[Passenger.Survived]
    if labels.isna().any():
        raise lifeboat.MissingError(f'Missing labels for records: {list(data.index[labels.isna()])}')
    return data.drop(columns=Passenger.Survived), labels.astype(int)
