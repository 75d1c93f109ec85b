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
Random forest classifier with the hyper-parameter search.
"""
import logging
import typing

import pandas
from sklearn import ensemble, model_selection

from lifeboat import flow
from lifeboat.schema import Passenger

LOGGER = logging.getLogger(__name__)

SEPARATOR = '='


def encode(features: pandas.DataFrame) -> pandas.DataFrame:
    """One-hot encoding of the categorical columns.

    The categorical levels are fixed by the assembler so the encoded columns are identical across the
    partitions.
    """
    return pandas.get_dummies(features, prefix_sep=SEPARATOR, dtype=float)


class Classifier(flow.Actor[pandas.DataFrame, pandas.Series, pandas.Series]):
    """Stateful actor training a random forest using a randomized cross-validated search of the
    hyper-parameter space.

    Args:
        space: Mapping of the random forest hyper-parameter names to lists of candidate values.
        folds: Number of the stratified cross-validation folds.
        budget: Number of the sampled candidate configurations.
        seed: Random state for the search, the folds and the forest.
        n_jobs: Parallelism of the search.
    """

    def __init__(
        self,
        space: typing.Mapping[str, typing.Sequence[typing.Any]],
        folds: int = 5,
        budget: int = 20,
        seed: typing.Optional[int] = None,
        n_jobs: typing.Optional[int] = None,
    ):
        self._space: dict[str, list[typing.Any]] = {k: list(v) for k, v in space.items()}
        self._folds: int = folds
        self._budget: int = budget
        self._seed: typing.Optional[int] = seed
        self._n_jobs: typing.Optional[int] = n_jobs
        self._search: typing.Optional[model_selection.RandomizedSearchCV] = None
        self._columns: typing.Optional[list[str]] = None

    def train(self, features: pandas.DataFrame, labels: pandas.Series, /) -> None:
        encoded = encode(features)
        search = model_selection.RandomizedSearchCV(
            ensemble.RandomForestClassifier(random_state=self._seed),
            param_distributions=self._space,
            n_iter=self._budget,
            scoring='accuracy',
            cv=model_selection.StratifiedKFold(n_splits=self._folds, shuffle=True, random_state=self._seed),
            n_jobs=self._n_jobs,
            random_state=self._seed,
        )
        search.fit(encoded, labels)
        LOGGER.info('Best params: %s (cv accuracy %.4f)', search.best_params_, search.best_score_)
        self._search = search
        self._columns = list(encoded.columns)

    def apply(self, features: pandas.DataFrame) -> pandas.Series:
        if self._search is None:
            raise RuntimeError('Actor not trained')
        encoded = encode(features).reindex(columns=self._columns, fill_value=0.0)
        return pandas.Series(self._search.predict(encoded), index=features.index, name=Passenger.Survived)

    @property
    def params(self) -> typing.Mapping[str, typing.Any]:
        """The selected hyper-parameters.

        Returns:
            Best configuration found by the search.
        """
        if self._search is None:
            raise RuntimeError('Actor not trained')
        return dict(self._search.best_params_)

    @property
    def importances(self) -> pandas.Series:
        """Feature importance ranking with the encoded columns summed back into their source features.

        Returns:
            Importances indexed by the feature name sorted in descending order.
        """
        if self._search is None:
            raise RuntimeError('Actor not trained')
        ranking = pandas.Series(self._search.best_estimator_.feature_importances_, index=self._columns)
        return ranking.groupby(lambda c: c.split(SEPARATOR, 1)[0]).sum().sort_values(ascending=False)

    def get_params(self) -> typing.Mapping[str, typing.Any]:
        return {
            'space': self._space,
            'folds': self._folds,
            'budget': self._budget,
            'seed': self._seed,
            'n_jobs': self._n_jobs,
        }

    def set_params(self, **params: typing.Any) -> None:
        for key, value in params.items():
            if key not in {'space', 'folds', 'budget', 'seed', 'n_jobs'}:
                raise ValueError(f'Invalid param {key} for {self}')
            setattr(self, f'_{key}', value)
