"""Shared pytest fixtures for test isolation helpers."""

import errno
import io
import os
from pathlib import Path

import pytest

import tildesh.config as config_module
from tildesh.loop import Shell
from tildesh.models import ShellConfig


class FakeEnvironment:
    """In-memory stand-in for the process environment and working directory."""

    def __init__(self, cwd="/home/u", variables=None, directories=(), user="u", host="box"):
        self.cwd = cwd
        self.variables = {"HOME": "/home/u", "PWD": cwd}
        self.variables.update(variables or {})
        self.directories = {"/", cwd, *directories}
        self.user = user
        self.host = host
        self.failing_vars: set[str] = set()

    def get(self, name):
        return self.variables.get(name)

    def set(self, name, value):
        if name in self.failing_vars:
            raise OSError(errno.ENOMEM, os.strerror(errno.ENOMEM))
        self.variables[name] = value

    def getcwd(self):
        return self.cwd

    def chdir(self, path):
        if "\0" in path:
            raise ValueError("embedded null byte")
        if path not in self.directories:
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)
        self.cwd = path

    def username(self):
        return self.user

    def hostname(self):
        return self.host


class FakeSpawner:
    """Records spawn/wait/detach calls instead of forking."""

    def __init__(self, next_pid=4242, fail=None):
        self.next_pid = next_pid
        self.fail = fail
        self.calls = []

    def spawn(self, argv):
        self.calls.append(("spawn", list(argv)))
        if self.fail is not None:
            raise self.fail
        return self.next_pid

    def wait(self, pid):
        self.calls.append(("wait", pid))
        return 0

    def detach(self, pid):
        self.calls.append(("detach", pid))


@pytest.fixture()
def fake_env() -> FakeEnvironment:
    return FakeEnvironment(directories={"/home/u", "/tmp", "/x", "/x/a", "/x/a/b", "/prev"})


@pytest.fixture()
def fake_spawner() -> FakeSpawner:
    return FakeSpawner()


@pytest.fixture()
def make_shell(fake_env, fake_spawner):
    """Build a Shell wired to fakes and string streams."""
    def _make(input_text="", config=None):
        return Shell(
            config=config or ShellConfig(color=False),
            env=fake_env,
            spawner=fake_spawner,
            stdin=io.StringIO(input_text),
            stdout=io.StringIO(),
            stderr=io.StringIO(),
        )

    return _make


@pytest.fixture()
def tildesh_config_paths(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> tuple[Path, Path]:
    """Redirect tildesh config paths to a temp directory."""
    config_dir = tmp_path / ".tildesh"
    config_file = config_dir / "config.json"
    monkeypatch.setattr(config_module, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_file)
    return config_dir, config_file


@pytest.fixture()
def config_dir(tildesh_config_paths: tuple[Path, Path]) -> Path:
    return tildesh_config_paths[0]


@pytest.fixture()
def config_file(tildesh_config_paths: tuple[Path, Path]) -> Path:
    return tildesh_config_paths[1]
