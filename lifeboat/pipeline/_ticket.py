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
Family grouping key.
"""
import typing

import pandas

from lifeboat import flow
from lifeboat.schema import Derived, Passenger


def surname(name: str) -> str:
    """Family name is the part of the full name before the first comma."""
    return str(name).split(',', 1)[0].strip()


def normalize(ticket: str, wildcard: str = 'X') -> str:
    """Replace the last character of the ticket with the wildcard so that tickets differing only in their
    trailing check digit or sub-ticket letter compare equal.

    Args:
        ticket: Raw ticket identifier.
        wildcard: Marker to put in place of the last character.

    Returns:
        Normalized ticket.
    """
    return str(ticket)[:-1] + wildcard


class KeyNormalizer(flow.Actor[pandas.DataFrame, None, pandas.DataFrame]):
    """Stateless actor deriving the ``Surname`` and ``TicketKey`` columns used for the family grouping.

    This is a heuristic that produces both false merges and false splits of real families.
    """

    def __init__(self, wildcard: str = 'X'):
        self._wildcard: str = wildcard

    def apply(self, features: pandas.DataFrame) -> pandas.DataFrame:
        return features.assign(
            **{
                Derived.Surname: features[Passenger.Name].map(surname),
                Derived.TicketKey: features[Passenger.Ticket].map(lambda t: normalize(t, self._wildcard)),
            }
        )

    def get_params(self) -> typing.Mapping[str, typing.Any]:
        return {'wildcard': self._wildcard}

    def set_params(self, wildcard: str) -> None:  # pylint: disable=arguments-differ
        self._wildcard = wildcard
