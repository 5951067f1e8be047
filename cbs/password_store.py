#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Reading of credentials that are not passed on the command line

Monitoring configurations usually keep the password of the backup account in
a file readable only by the monitoring user (e.g. /etc/nagios/password)
instead of exposing it in the process list.
"""

from pathlib import Path

from cbs.exceptions import MKBailOut


def read_password(path: Path) -> str:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise MKBailOut(f"Cannot read password file {path}: {e.strerror}") from e
    except UnicodeDecodeError as e:
        raise MKBailOut(f"Cannot read password file {path}: not UTF-8 encoded") from e
    return content.removesuffix("\n").removesuffix("\r")
