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
Actor composition.
"""
import logging
import typing

from . import _task

LOGGER = logging.getLogger(__name__)


class Chain(_task.Actor[_task.Features, _task.Labels, _task.Result]):
    """Linear composition of actors where each one consumes the output of its predecessor.

    In train mode, every stateful member gets trained on the output of its upstream members (which
    are applied using their freshly trained state) before passing its own output further down.

    Examples:
        >>> DERIVE = pipeline.Imputer() >> pipeline.TitleExtractor() >> pipeline.FareNormalizer()
    """

    def __init__(self, *actors: _task.Actor):
        if not actors:
            raise ValueError('Empty chain')
        self._actors: tuple[_task.Actor, ...] = tuple(
            m for a in actors for m in (a.actors if isinstance(a, Chain) else (a,))
        )

    def __repr__(self):
        return ' >> '.join(repr(a) for a in self._actors)

    def __rshift__(self, right: _task.Actor) -> 'Chain':
        return Chain(self, right)

    @property
    def actors(self) -> typing.Sequence[_task.Actor]:
        """The chain members.

        Returns:
            Sequence of the member actors.
        """
        return self._actors

    def train(self, features: _task.Features, labels: _task.Labels, /) -> None:
        for actor in self._actors:
            if actor.is_stateful():
                LOGGER.debug('Training %s', actor)
                actor.train(features, labels)
            features = actor.apply(features)

    def apply(self, features: _task.Features) -> _task.Result:
        for actor in self._actors:
            LOGGER.debug('Applying %s', actor)
            features = actor.apply(features)
        return features
