"""Pytest configuration and shared fixtures."""

import os
import stat
from pathlib import Path

import pytest

from kafka_acl_profiles.config.config import ENV_VARS, PATTERNS_ENV_VARS

STUB_SCRIPT = """#!/bin/sh
printf '%s\\n' "$*" >> "$ACL_STUB_LOG"
if [ -n "$ACL_STUB_FAIL_ON" ]; then
  case "$*" in
    *"$ACL_STUB_FAIL_ON"*) exit "${ACL_STUB_EXIT:-3}" ;;
  esac
fi
exit 0
"""


@pytest.fixture(autouse=True)
def clean_environ(monkeypatch):
    """Settings env vars from the calling shell must not leak into the tests."""
    for env_var in (*ENV_VARS, *PATTERNS_ENV_VARS):
        monkeypatch.delenv(env_var, raising=False)


@pytest.fixture
def kafka_bin(tmp_path) -> Path:
    """A Kafka bin directory with a kafka-acls.sh stub recording its arguments."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    tool = bin_dir / "kafka-acls.sh"
    tool.write_text(STUB_SCRIPT)
    tool.chmod(tool.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return bin_dir


@pytest.fixture
def stub_log(tmp_path, monkeypatch) -> Path:
    log_path = tmp_path / "invocations.log"
    monkeypatch.setenv("ACL_STUB_LOG", str(log_path))
    monkeypatch.delenv("ACL_STUB_FAIL_ON", raising=False)
    return log_path


def read_invocations(log_path: Path) -> list[str]:
    if not log_path.exists():
        return []
    return log_path.read_text().splitlines()


@pytest.fixture
def invocations(stub_log):
    return lambda: read_invocations(stub_log)


@pytest.fixture
def config_file(tmp_path):
    def _write(content: str) -> str:
        path = tmp_path / "settings.yaml"
        path.write_text(content)
        return os.fspath(path)

    return _write
