#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""User-defined exceptions and error handling related constant."""

__all__ = [
    "MKBailOut",
    "MKException",
    "MeasurementError",
    "MissingDependencyError",
]


# never used directly in the code. Just some wrapper to make all of our
# exceptions handleable with one call
class MKException(Exception):
    pass


# This is raised to print an error message and then end the program.
# The program should catch this at top level and end exit the program
# with exit code 3, in order to be compatible with monitoring plug-in API.
class MKBailOut(MKException):
    pass


class MissingDependencyError(MKBailOut):
    """Raised when the transfer client is not installed."""


class MeasurementError(MKException):
    """Raised when the disk usage could not be determined on the remote side.

    Note:
        The check reports this as UNKNOWN instead of guessing zero usage.
    """
