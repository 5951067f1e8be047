#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from setuptools import find_packages, setup

setup(
    name="check-backup-space",
    version="0.1.0",
    packages=find_packages(include=["cbs", "cbs.*"]),
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=["pydantic>=2"],
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": [
            "check_backup_space=cbs.active_checks.check_backup_space:main",
        ],
    },
)
