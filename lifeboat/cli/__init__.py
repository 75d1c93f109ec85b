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
Lifeboat command line interface.
"""
import logging
import sys
import typing

import click
import cloudpickle
from click import core

import lifeboat
from lifeboat import conf, runtime, source
from lifeboat.conf import logging as logcfg

LOGGER = logging.getLogger(__name__)


class Scope(typing.NamedTuple):
    """Case class for holding the partial command config."""

    config: typing.Optional[str]
    loglevel: typing.Optional[str]


@click.group(name='lifeboat')
@click.option('--config', '-C', type=click.Path(exists=True, file_okay=True), help='Additional config file.')
@click.option(
    '--loglevel',
    '-L',
    type=click.Choice(['debug', 'info', 'warning', 'error'], case_sensitive=False),
    help='Global loglevel to use.',
)
@click.pass_context
def group(context: core.Context, config: typing.Optional[str], loglevel: typing.Optional[str]):
    """Passenger survival feature engineering and classification."""
    logcfg.setup()
    if config:
        conf.CONFIG.read(config)  # triggers the logging reload
    if loglevel:
        logging.getLogger(lifeboat.__name__).setLevel(loglevel.upper())
    context.obj = Scope(config, loglevel)


@group.command()
@click.argument('trainset', type=click.Path(exists=True, dir_okay=False))
@click.option('--testset', '-T', type=click.Path(exists=True, dir_okay=False), help='Unlabelled passengers.')
@click.option('--output', '-O', type=click.Path(dir_okay=False), help='Output CSV file (stdout by default).')
def features(trainset: str, testset: typing.Optional[str], output: typing.Optional[str]):
    """Derive the features of the whole passenger population."""
    derived = runtime.derivation().apply(source.load(trainset, testset))
    derived.to_csv(output or sys.stdout, index=False)


@group.command()
@click.argument('trainset', type=click.Path(exists=True, dir_okay=False))
@click.option('--testset', '-T', type=click.Path(exists=True, dir_okay=False), help='Unlabelled passengers.')
@click.option('--predictions', '-P', type=click.Path(dir_okay=False), help='Output CSV for testset predictions.')
@click.option('--model', '-M', type=click.Path(dir_okay=False), help='Output file for the pickled trained model.')
def evaluate(
    trainset: str, testset: typing.Optional[str], predictions: typing.Optional[str], model: typing.Optional[str]
):
    """Train the classifier on the training partition and score it on the evaluation partition."""
    outcome = runtime.evaluate(source.load(trainset, testset))
    click.echo(f'Accuracy: {outcome.accuracy:.4f}')
    click.echo('Feature importances:')
    for feature, importance in outcome.importances.items():
        click.echo(f'  {feature:<16}{importance:.4f}')
    if predictions:
        outcome.predictions.to_csv(predictions, index=False)
        LOGGER.info('Predictions written to %s', predictions)
    if model:
        with open(model, 'wb') as dump:
            cloudpickle.dump(outcome.model, dump)
        LOGGER.info('Model written to %s', model)


def main() -> None:
    """Cli wrapper for handling Lifeboat exceptions."""
    try:
        group()  # pylint: disable=no-value-for-parameter
    except lifeboat.AnyError as err:
        print(err, file=sys.stderr)
        sys.exit(1)
