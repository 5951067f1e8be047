#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""check_backup_space - Monitor the free space left on a remote backup storage"""

NAME = "check_backup_space"
__version__ = "0.1.0"
