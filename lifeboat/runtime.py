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
Batch run of the feature derivation, training and evaluation.

All the population-wide statistics (title frequencies, embarkation mode, fare medians, families) are
computed over the whole population including the evaluation partition and the unlabelled testset. Only the
evaluation outcomes are concealed so the population structure (but not the labels) is shared across
the partitions.
"""
import logging
import typing

import pandas

from lifeboat import conf, evaluation, flow, pipeline, source
from lifeboat.schema import Passenger

LOGGER = logging.getLogger(__name__)


def derivation(min_count: typing.Optional[int] = None, wildcard: typing.Optional[str] = None) -> flow.Chain:
    """The stateless feature derivation chain.

    Args:
        min_count: Title lumping threshold (defaults to the config value).
        wildcard: Ticket normalization marker (defaults to the config value).

    Returns:
        Actor chain deriving all the features of the passenger population.
    """
    if min_count is None:
        min_count = conf.get(conf.SECTION_TITLE, conf.OPT_MIN_COUNT)
    if wildcard is None:
        wildcard = conf.get(conf.SECTION_FAMILY, conf.OPT_WILDCARD)
    return (
        pipeline.Imputer()
        >> pipeline.TitleExtractor(min_count=min_count)
        >> pipeline.KeyNormalizer(wildcard=wildcard)
        >> pipeline.FareNormalizer()
        >> pipeline.FamilyAggregator()
    )


def classifier(**kwargs: typing.Any) -> evaluation.Classifier:
    """Classifier actor configured from the config ``SEARCH`` section (overridable by the kwargs)."""
    section = conf.CONFIG[conf.SECTION_SEARCH]
    params = {
        'space': section[conf.OPT_SPACE],
        'folds': section[conf.OPT_FOLDS],
        'budget': section[conf.OPT_BUDGET],
        'seed': conf.get(conf.SECTION_SPLIT, conf.OPT_SEED),
        'n_jobs': section.get(conf.OPT_NJOBS),
    }
    return evaluation.Classifier(**(params | kwargs))


class Outcome(typing.NamedTuple):
    """Result of the evaluation run."""

    derived: pandas.DataFrame
    model: flow.Chain
    accuracy: float
    importances: pandas.Series
    predictions: pandas.DataFrame


def evaluate(
    data: pandas.DataFrame,
    train_size: typing.Optional[float] = None,
    seed: typing.Optional[int] = None,
    derive: typing.Optional[flow.Actor] = None,
    model: typing.Optional[evaluation.Classifier] = None,
) -> Outcome:
    """Run the whole pipeline.

    Args:
        data: Passenger population (as returned by :func:`source.load <lifeboat.source.load>`).
        train_size: Fraction of the labelled records used for training (defaults to the config value).
        seed: Random state of the split (defaults to the config value).
        derive: Feature derivation actor (defaults to :func:`derivation`).
        model: Classifier actor (defaults to :func:`classifier`).

    Returns:
        The evaluation outcome.
    """
    if train_size is None:
        train_size = conf.get(conf.SECTION_SPLIT, conf.OPT_TRAIN_SIZE)
    if seed is None:
        seed = conf.get(conf.SECTION_SPLIT, conf.OPT_SEED)
    trainidx, evalidx = source.split(data, train_size=train_size, seed=seed)
    derived = (derive or derivation()).apply(source.conceal(data, evalidx))
    features, labels = source.extract(derived.loc[trainidx])

    model = model or classifier()
    chain = pipeline.Assembler() >> model
    chain.train(features, labels)
    pred = chain.apply(derived.loc[evalidx].drop(columns=Passenger.Survived))
    score = evaluation.accuracy(data.loc[evalidx, Passenger.Survived].astype(int), pred)
    LOGGER.info('Evaluation accuracy: %.4f (%d records)', score, len(evalidx))

    unlabelled = data.index[data[Passenger.Survived].isna()]
    predictions = pandas.DataFrame(columns=[Passenger.PassengerId, Passenger.Survived])
    if len(unlabelled):
        predictions = pandas.DataFrame(
            {
                Passenger.PassengerId: data.loc[unlabelled, Passenger.PassengerId],
                Passenger.Survived: chain.apply(derived.loc[unlabelled].drop(columns=Passenger.Survived)),
            }
        )
        LOGGER.info('Predicted %d unlabelled records', len(unlabelled))
    return Outcome(derived, chain, score, model.importances, predictions)
