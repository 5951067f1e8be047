#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Classification of the free space left against the configured levels"""

import enum
from dataclasses import dataclass


class State(enum.Enum):
    OK = 0
    WARN = 1
    CRIT = 2
    UNKNOWN = 3


def service_state_names() -> dict[State, str]:
    return {
        State.OK: "OK",
        State.WARN: "WARNING",
        State.CRIT: "CRITICAL",
        State.UNKNOWN: "UNKNOWN",
    }


def state_name(state: State) -> str:
    return service_state_names()[state]


@dataclass(frozen=True)
class Verdict:
    state: State

    @property
    def label(self) -> str:
        return state_name(self.state)

    @property
    def exit_code(self) -> int:
        return self.state.value


def classify(free_space: float, warning: float, critical: float) -> Verdict:
    """Map the free space to a monitoring state

    Reaching a level exactly does not trigger it. The levels are expected to
    satisfy warning > critical, which is not enforced here.

    >>> classify(20.0, 20, 10).label
    'OK'
    >>> classify(10.0, 20, 10).label
    'WARNING'
    >>> classify(9.99, 20, 10).exit_code
    2
    """
    if free_space >= warning:
        return Verdict(State.OK)
    if free_space >= critical:
        return Verdict(State.WARN)
    return Verdict(State.CRIT)
