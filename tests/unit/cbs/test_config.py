#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import argparse
from pathlib import Path

import pytest

from cbs.config import Config, missing_arguments, resolve_config
from cbs.exceptions import MKBailOut


def _namespace(**kwargs: object) -> argparse.Namespace:
    defaults: dict[str, object] = {
        "host": "u123.your-backup.de",
        "user": "u123",
        "password": "pw",
        "file": None,
        "warning": 20,
        "critical": 10,
        "maximum": 100,
        "protocol": None,
        "verbose": False,
        "timeout": 60.0,
        "lftp": None,
        "debug": False,
    }
    return argparse.Namespace(**(defaults | kwargs))


def test_missing_arguments_all() -> None:
    assert missing_arguments(
        _namespace(host=None, user=None, password=None, warning=None, critical=None, maximum=None)
    ) == ["user", "password", "host", "warning limit", "critical limit"]


def test_missing_arguments_password_file_is_sufficient(tmp_path: Path) -> None:
    assert not missing_arguments(_namespace(password=None, file=tmp_path / "pw"))


def test_resolve_config_defaults() -> None:
    assert resolve_config(_namespace()) == Config(
        host="u123.your-backup.de",
        user="u123",
        password="pw",
        quota=100,
        warning=20,
        critical=10,
        protocol="sftp",
    )


def test_resolve_config_reads_password_file(password_file: Path) -> None:
    config = resolve_config(_namespace(password=None, file=password_file))
    assert config.password == "secret"


def test_resolve_config_password_file_takes_precedence(tmp_path: Path) -> None:
    password_file = tmp_path / "password"
    password_file.write_text("from-file\n")
    assert resolve_config(_namespace(file=password_file)).password == "from-file"


def test_resolve_config_missing_fields() -> None:
    with pytest.raises(MKBailOut, match=r"^Missing arguments for user, host\.$"):
        resolve_config(_namespace(user=None, host=None))


def test_resolve_config_missing_quota() -> None:
    with pytest.raises(MKBailOut, match=r"^Missing arguments for quota\.$"):
        resolve_config(_namespace(maximum=None))


def test_resolve_config_invalid_protocol() -> None:
    with pytest.raises(MKBailOut, match="Invalid arguments: protocol"):
        resolve_config(_namespace(protocol="scp"))


def test_config_is_immutable() -> None:
    config = resolve_config(_namespace())
    with pytest.raises(ValueError):
        config.host = "elsewhere"  # type: ignore[misc]
