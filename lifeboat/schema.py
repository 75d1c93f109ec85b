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
Kaggle's Titanic dataset schema.
"""
import pandas

import lifeboat


class Passenger:
    """Titanic: Machine Learning from Disaster.

    Variable Notes:
        pclass: A proxy for socio-economic status (SES)
            * 1st = Upper
            * 2nd = Middle
            * 3rd = Lower

        age: Age is fractional if less than 1. If the age is estimated, is it in the form of xx.5

        sibsp: The dataset defines family relations in this way...
            * Sibling = brother, sister, stepbrother, stepsister
            * Spouse = husband, wife (mistresses and fiancés were ignored)

        parch: The dataset defines family relations in this way...
            * Parent = mother, father
            * Child = daughter, son, stepdaughter, stepson

            Some children travelled only with a nanny, therefore parch=0 for them.

        fare: Total paid for the ticket, shared by all the passengers travelling on it.
    """

    PassengerId = 'PassengerId'  # Passenger ID
    Survived = 'Survived'  # Survival (0 = No, 1 = Yes, missing = unknown)
    Pclass = 'Pclass'  # Ticket class (1 = 1st, 2 = 2nd, 3 = 3rd)
    Name = 'Name'  # Passenger name
    Sex = 'Sex'  # Sex (male, female)
    Age = 'Age'  # Age in years
    SibSp = 'SibSp'  # # of siblings / spouses aboard the Titanic
    Parch = 'Parch'  # # of parents / children aboard the Titanic
    Ticket = 'Ticket'  # Ticket number
    Fare = 'Fare'  # Passenger fare
    Cabin = 'Cabin'  # Cabin number
    Embarked = 'Embarked'  # Port of Embarkation (C = Cherbourg, Q = Queenstown, S = Southampton)


class Derived:
    """Columns produced by the feature derivation."""

    Title = 'Title'  # Honorific with rare levels lumped and recoded by sex
    FamilyTitle = 'FamilyTitle'  # Title with the Mr/Miss child refinement
    Surname = 'Surname'  # Family name
    TicketKey = 'TicketKey'  # Ticket with its last character replaced by wildcard
    RealFare = 'RealFare'  # Per person fare
    CabinRecorded = 'CabinRecorded'  # Cabin presence indicator (yes, no)
    FamilySurvived = 'FamilySurvived'  # Family outcome category (none, some, all, unknown, single)


#: Fields every record must carry.
REQUIRED = (
    Passenger.PassengerId,
    Passenger.Pclass,
    Passenger.Name,
    Passenger.Sex,
    Passenger.SibSp,
    Passenger.Parch,
    Passenger.Ticket,
)

#: Fields that are allowed to be missing (but must be present as columns).
OPTIONAL = (Passenger.Age, Passenger.Fare, Passenger.Cabin, Passenger.Embarked)

SEXES = frozenset({'male', 'female'})


def validate(data: pandas.DataFrame) -> pandas.DataFrame:
    """Check the raw passenger table is usable for the feature derivation.

    Args:
        data: Raw passenger table.

    Returns:
        The same table if valid.

    Raises:
        lifeboat.MissingError: If any of the columns is absent or a required field is missing.
        lifeboat.UnexpectedError: If the sex field carries an unknown value.
    """
    absent = [c for c in (*REQUIRED, *OPTIONAL) if c not in data.columns]
    if absent:
        raise lifeboat.MissingError(f'Missing columns: {", ".join(absent)}')
    for column in REQUIRED:
        missing = data[column].isna()
        if missing.any():
            raise lifeboat.MissingError(f'Missing {column} for records: {list(data.index[missing])}')
    unknown = ~data[Passenger.Sex].isin(SEXES)
    if unknown.any():
        raise lifeboat.UnexpectedError(f'Unknown {Passenger.Sex} values: {sorted(set(data[Passenger.Sex][unknown]))}')
    return data
