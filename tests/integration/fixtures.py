from __future__ import annotations

import os
import shlex
import subprocess
import sys

import py.path
import pytest

EXECUTABLE = os.getenv(
    "STREAMCAT__TESTS_EXECUTABLE", f"{shlex.quote(sys.executable)} -m streamcat.commands"
)


@pytest.fixture
def setup_config(tmpdir: py.path.local):
    config_path = tmpdir.mkdir("configs").join("bundles.ini")
    os.environ["STREAMCAT_CONFIG_PATH"] = str(config_path)
    os.environ["STREAMCAT_PROGRESS_DISABLED"] = "YES"
    yield config_path
    if tmpdir.check():
        tmpdir.remove(ignore_errors=True)
    os.environ.pop("STREAMCAT_CONFIG_PATH", None)
    os.environ.pop("STREAMCAT_PROGRESS_DISABLED", None)


@pytest.fixture
def setup_data(tmpdir: py.path.local):
    data_path = tmpdir.mkdir("data")
    data_path.join("00.part").write_binary(b"\x01")
    data_path.join("01.part").write_binary(b"\x01\x02")
    data_path.join("02.part").write_binary(b"")
    data_path.join("03.part").write_binary(b"\x01\x02\x03")
    yield data_path
    if tmpdir.check():
        tmpdir.remove(ignore_errors=True)


def run_command(
    params: list[str], command: str, **kwargs
) -> subprocess.CompletedProcess:
    return subprocess.run(
        [*shlex.split(EXECUTABLE), command, *params],
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        **kwargs,
    )
