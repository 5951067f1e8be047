#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

GIB = 1024 * 1024 * 1024


def fmt_bytes(v: float) -> str:
    """
    >>> fmt_bytes(512)
    '512.00 B'
    >>> fmt_bytes(5368709120)
    '5.00 GiB'
    >>> fmt_bytes(-2048)
    '-2.00 KiB'
    """
    for prefix in ("B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB", "ZiB", "YiB"):
        if abs(v) < 1024:
            return f"{v:.2f} {prefix}"
        v /= 1024
    return f"{v:.2f} YiB"
