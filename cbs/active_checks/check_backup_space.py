#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""check_backup_space - Monitor the space left on a remote backup storage"""

# The used space is determined with lftp (du -sb on the login directory) and
# subtracted from the quota of the backup space. The remaining space is
# compared against the warning and critical levels, all given in GiB.

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import NoReturn

from cbs import __version__, NAME
from cbs.config import Config, DEFAULT_TIMEOUT, PROTOCOLS, resolve_config
from cbs.exceptions import MeasurementError, MKBailOut, MissingDependencyError
from cbs.lftp import DiskUsageProto, LftpDiskUsage, measure, UsageMeasurement
from cbs.log import logger, setup_logging
from cbs.state import classify, State, state_name, Verdict

SERVICE_NAME = "BACKUP_SPACE"
LICENSE_LINE = "Released under the GNU General Public License v2."


class _ArgumentParser(argparse.ArgumentParser):
    # Monitoring plug-ins report usage errors with exit code 3
    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(3, f"{self.prog}: error: {message}\n")


class _VersionAction(argparse.Action):
    def __init__(self, option_strings: Sequence[str], dest: str, **kwargs: object) -> None:
        super().__init__(
            option_strings,
            dest,
            nargs=0,
            default=argparse.SUPPRESS,
            help="Show version and exit",
        )

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: object,
        option_string: str | None = None,
    ) -> NoReturn:
        sys.stdout.write(f"{NAME} - v{__version__}\n{LICENSE_LINE}\n")
        parser.exit(3)


def parse_arguments(argv: Sequence[str]) -> argparse.Namespace:
    parser = _ArgumentParser(
        prog=NAME,
        description="Check the space left on a remote backup storage via (s)ftp or ssh.",
    )

    required = parser.add_argument_group("required arguments")
    required.add_argument("-H", "--host", metavar="HOST", help="Set backup host")
    required.add_argument("-u", "--user", metavar="USER", help="Set user")
    required.add_argument("-p", "--password", metavar="PASS", help="Set user password")
    required.add_argument(
        "-w",
        "--warning",
        type=int,
        metavar="SIZE",
        help="Set space left warning limit in GB",
    )
    required.add_argument(
        "-c",
        "--critical",
        type=int,
        metavar="SIZE",
        help="Set space left critical limit in GB",
    )
    required.add_argument(
        "-m",
        "--maximum",
        type=int,
        metavar="SIZE",
        help="Set maximum of your backup space capacity in GB",
    )

    parser.add_argument(
        "-f",
        "--file",
        type=Path,
        metavar="/etc/nagios/password",
        help="Read password from file (replaces --password)",
    )
    parser.add_argument(
        "--protocol",
        choices=PROTOCOLS,
        default=None,
        help="Set protocol to determine disk usage (default sftp)",
    )
    parser.add_argument(
        "--verbose",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Run verbosely",
    )
    parser.add_argument(
        "-t",
        "--timeout",
        type=float,
        metavar="SECONDS",
        default=DEFAULT_TIMEOUT,
        help=f"Seconds before lftp is terminated (Default: {DEFAULT_TIMEOUT:g})",
    )
    parser.add_argument(
        "--lftp",
        metavar="PATH",
        default=None,
        help="Path to the lftp binary (Default: lookup in PATH)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Debug mode: let Python exceptions come through.",
    )
    parser.add_argument("-v", "--version", action=_VersionAction)

    return parser.parse_args(argv)


def _output_check_result(s: str) -> None:
    sys.stdout.write("%s\n" % s)


def _format_result(config: Config, verdict: Verdict, measurement: UsageMeasurement) -> str:
    return "%s %s - free space: %dGB of %dGB (w: %dGB c: %dGB)" % (
        SERVICE_NAME,
        verdict.label,
        int(measurement.free_space_gib),
        config.quota,
        config.warning,
        config.critical,
    )


def _format_unknown(message: str) -> str:
    return f"{SERVICE_NAME} {state_name(State.UNKNOWN)} - {message}"


def _check_backup_space(config: Config, disk_usage: DiskUsageProto) -> tuple[int, str]:
    try:
        measurement = measure(config, disk_usage)
    except (MissingDependencyError, MeasurementError) as e:
        if config.debug:
            raise
        return State.UNKNOWN.value, _format_unknown(str(e))
    except Exception as e:
        if config.debug:
            raise
        return State.UNKNOWN.value, _format_unknown(f"Unhandled exception: {e}")

    logger.debug(
        "Free space: %.2f GiB of %d GiB (levels at %d/%d GiB)",
        measurement.free_space_gib,
        config.quota,
        config.warning,
        config.critical,
    )
    verdict = classify(measurement.free_space_gib, config.warning, config.critical)
    return verdict.exit_code, _format_result(config, verdict, measurement)


def main(
    argv: Sequence[str] | None = None,
    disk_usage: DiskUsageProto | None = None,
) -> int:
    args = parse_arguments(sys.argv[1:] if argv is None else argv)
    setup_logging(args.verbose)

    try:
        config = resolve_config(args)
    except MKBailOut as e:
        if args.debug:
            raise
        _output_check_result(str(e))
        return State.UNKNOWN.value

    exitcode, info = _check_backup_space(config, disk_usage or LftpDiskUsage())
    _output_check_result(info)
    return exitcode


if __name__ == "__main__":
    sys.exit(main())
