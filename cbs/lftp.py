#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Disk usage of a remote backup space, determined with lftp

lftp is asked for the size of the login directory in bytes:

    $ lftp --env-password -u u123456 -e 'du -sb .; exit' sftp://u123456.your-backup.de
    53687091200	.

"""

from __future__ import annotations

import math
import os
import re
import shutil
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from cbs.config import Config
from cbs.exceptions import MeasurementError, MissingDependencyError
from cbs.log import logger
from cbs.render import fmt_bytes

DU_COMMAND = "du -sb .; exit"
PASSWORD_ENV = "LFTP_PASSWORD"


class DiskUsageProto(Protocol):
    def __call__(self, config: Config) -> float: ...


@dataclass(frozen=True)
class UsageMeasurement:
    disk_usage_bytes: float
    free_space_gib: float


def find_client(client: str | None = None) -> str:
    if client is not None:
        if os.path.isfile(client) and os.access(client, os.X_OK):
            return client
        raise MissingDependencyError(f"lftp program is missing ({client} is not executable)")

    if (found := shutil.which("lftp")) is None:
        raise MissingDependencyError("lftp program is missing")
    return found


def build_command(client: str, config: Config) -> list[str]:
    return [
        client,
        "--env-password",
        "-u",
        config.user,
        "-e",
        DU_COMMAND,
        f"{config.protocol}://{config.host}",
    ]


def parse_disk_usage(output: str) -> float:
    """Keep the digits of the output and read them as a byte count

    >>> parse_disk_usage("total 5368709120 bytes\\n")
    5368709120.0
    >>> parse_disk_usage("")
    0.0
    """
    digits = re.sub(r"\D", "", output)
    return float(digits) if digits else 0.0


def calculate_free_space(quota: float, disk_usage: float) -> float:
    """
    >>> calculate_free_space(100, 1073741824)
    99.0
    """
    return quota - (disk_usage / 1024 / 1024 / 1024)


def _last_line(output: str) -> str:
    lines = [line.strip() for line in output.splitlines() if line.strip()]
    return lines[-1] if lines else "no output"


class LftpDiskUsage:
    def __call__(self, config: Config) -> float:
        output = self._execute_disk_usage_command(
            build_command(find_client(config.client), config),
            password=config.password,
            timeout=config.timeout,
        )
        disk_usage = parse_disk_usage(output)
        logger.debug("Disk usage on %s: %s", config.host, fmt_bytes(disk_usage))
        return disk_usage

    @staticmethod
    def _execute_disk_usage_command(cmd: Sequence[str], *, password: str, timeout: float) -> str:
        logger.debug("Executing: %s", subprocess.list2cmdline(cmd))
        try:
            completed_process = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                stdin=subprocess.DEVNULL,
                encoding="utf8",
                errors="replace",
                check=False,
                timeout=timeout,
                env={**os.environ, PASSWORD_ENV: password},
            )
        except subprocess.TimeoutExpired as e:
            raise MeasurementError(f"Timeout after {timeout:g} seconds") from e
        except OSError as e:
            raise MeasurementError(f"Cannot execute {cmd[0]}: {e.strerror}") from e

        if completed_process.returncode:
            raise MeasurementError(
                "lftp exited with code %d: %s"
                % (completed_process.returncode, _last_line(completed_process.stdout))
            )
        return completed_process.stdout


def measure(config: Config, disk_usage: DiskUsageProto) -> UsageMeasurement:
    disk_usage_bytes = disk_usage(config)
    if not math.isfinite(disk_usage_bytes):
        raise MeasurementError(f"Invalid disk usage: {disk_usage_bytes}")
    return UsageMeasurement(
        disk_usage_bytes=disk_usage_bytes,
        free_space_gib=calculate_free_space(config.quota, disk_usage_bytes),
    )
