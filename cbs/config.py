#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import argparse
from typing import Literal

from pydantic import BaseModel, ValidationError

from cbs.exceptions import MKBailOut
from cbs.password_store import read_password

TransferProtocol = Literal["sftp", "ftp", "ssh"]

PROTOCOLS: tuple[TransferProtocol, ...] = ("sftp", "ftp", "ssh")
DEFAULT_PROTOCOL: TransferProtocol = "sftp"
DEFAULT_TIMEOUT = 60.0


class Config(BaseModel, frozen=True):
    host: str
    user: str
    password: str
    quota: int
    warning: int
    critical: int
    protocol: TransferProtocol = DEFAULT_PROTOCOL
    verbose: bool = False
    client: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    debug: bool = False


def missing_arguments(args: argparse.Namespace) -> list[str]:
    missing = []
    if args.user is None:
        missing.append("user")
    if args.password is None and args.file is None:
        missing.append("password")
    if args.host is None:
        missing.append("host")
    if args.warning is None:
        missing.append("warning limit")
    if args.critical is None:
        missing.append("critical limit")
    return missing


def _bail_out_missing(missing: list[str]) -> None:
    if missing:
        raise MKBailOut("Missing arguments for %s." % ", ".join(missing))


def resolve_config(args: argparse.Namespace) -> Config:
    _bail_out_missing(missing_arguments(args))
    # The quota was never part of the first pass. Keeping it separate leaves
    # the message for a bare invocation unchanged.
    _bail_out_missing(["quota"] if args.maximum is None else [])

    password = read_password(args.file) if args.file is not None else args.password

    try:
        return Config(
            host=args.host,
            user=args.user,
            password=password,
            quota=args.maximum,
            warning=args.warning,
            critical=args.critical,
            protocol=args.protocol or DEFAULT_PROTOCOL,
            verbose=args.verbose,
            client=args.lftp,
            timeout=args.timeout,
            debug=args.debug,
        )
    except ValidationError as e:
        raise MKBailOut(
            "Invalid arguments: %s"
            % ", ".join(
                "%s: %s" % (".".join(str(loc) for loc in err["loc"]), err["msg"])
                for err in e.errors()
            )
        ) from e
