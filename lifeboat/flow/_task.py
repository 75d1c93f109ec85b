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
Flow actor abstraction.
"""

import abc
import logging
import typing

import cloudpickle

import lifeboat

if typing.TYPE_CHECKING:
    from lifeboat import flow


LOGGER = logging.getLogger(__name__)


def name(actor: typing.Any, *args, **kwargs) -> str:
    """Infer the task name of given instance or type.

    Args:
        actor: Type or actor instance.
        *args: Optional positional parameters.
        **kwargs: Optional keyword parameters.

    Returns:
        String name representation.
    """

    def extract(obj: typing.Any) -> str:
        """Extract the name of given object

        Args:
            obj: Object whose name to be extracted.

        Returns:
            Extracted name.
        """
        return obj.__name__ if hasattr(obj, '__name__') else repr(obj)

    value = extract(actor)
    params = [extract(a) for a in args] + [f'{k}={extract(v)}' for k, v in kwargs.items()]
    if params:
        value += '(' + ', '.join(params) + ')'
    return value


# Actor features type.
Features = typing.TypeVar('Features')

# Actor labels type.
Labels = typing.TypeVar('Labels')

# Actor apply result type.
Result = typing.TypeVar('Result')


class Actor(typing.Generic[Features, Labels, Result], metaclass=abc.ABCMeta):
    """Abstract actor base class.

    Actors are the units of the feature derivation. Stateless actors only implement :meth:`apply`
    and derive new columns from the frame they get. Stateful actors additionally implement
    :meth:`train` learning their state (ie category levels or scaling statistics) from the training
    partition only.

    Actors can be chained using the ``>>`` operator into a :class:`flow.Chain <lifeboat.flow.Chain>`.
    """

    def __repr__(self):
        return name(self.__class__, **self.get_params())

    def __rshift__(self, right: 'flow.Actor') -> 'flow.Chain':
        from lifeboat.flow import _chain  # pylint: disable=import-outside-toplevel

        return _chain.Chain(self, right)

    @abc.abstractmethod
    def apply(self, features: 'flow.Features') -> 'flow.Result':
        """The *apply* mode entry-point.

        Args:
            features: Input feature-set.

        Returns:
            Transformation result. Implementations must not modify the input in place.
        """

    def train(self, features: 'flow.Features', labels: 'flow.Labels', /) -> None:
        """The *train* mode entry point.

        Optional method implemented by stateful actors.

        Args:
            features: Train feature-set.
            labels: Train labels.
        """
        raise RuntimeError('Stateless actor')

    def get_state(self) -> bytes:
        """Return the internal state of the actor.

        The default implementation is using cloudpickle for serializing the entire actor object.

        Returns:
            State as bytes.
        """
        if not self.is_stateful():
            return b''
        LOGGER.debug('Getting %s state', self)
        return cloudpickle.dumps(self.__dict__)

    def set_state(self, state: bytes) -> None:
        """Set the new internal state of the actor.

        Args:
            state: Bytes to be used as internal state.
        """
        if not state:
            return
        if not self.is_stateful():
            raise lifeboat.UnexpectedError('State provided but actor stateless')
        LOGGER.debug('Setting %s state (%d bytes)', self, len(state))
        params = self.get_params()  # keep the original hyper-params
        self.__dict__.update(cloudpickle.loads(state))
        self.set_params(**params)  # restore the original hyper-params

    def get_params(self) -> typing.Mapping[str, typing.Any]:
        """Get the current hyper-parameters of the actor.

        The default implementation returns empty mapping.

        Returns:
            Dictionary of the name-value of the hyper-parameters.
        """
        return {}

    def set_params(self, **params: typing.Any) -> None:
        """Set new hyper-parameters of the actor.

        Args:
            params: New hyper-parameters as keyword arguments.
        """
        if params:
            raise NotImplementedError(f'Params setter for {params} not implemented on {self}')

    @classmethod
    def is_stateful(cls) -> bool:
        """Check whether this actor is stateful (determined based on existence user-overridden train method).

        Returns:
            True if stateful.
        """
        return cls.train.__code__ is not Actor.train.__code__
