from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Callable, Iterable, Iterator, Mapping, Sequence

import pytest

from core.config import AppSettings, CardanoConfig, Config, KupoConfig, MithrilConfig, OgmiosConfig
from core.environment import EnvVar


def write_script(directory: Path, name: str, body: str, *, executable: bool = True) -> Path:
    """Create a small POSIX shell script acting as a fake binary."""

    path = directory / name
    path.write_text("#!/bin/sh\n" + body + "\n", encoding="utf-8")
    mode = path.stat().st_mode
    if executable:
        path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    else:
        path.chmod(mode & ~(stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH))
    return path


class StubRunner:
    """CommandRunner double: maps an argv suffix to canned output."""

    def __init__(self, responses: Mapping[tuple[str, ...], str | Exception] | None = None) -> None:
        self.responses = dict(responses or {})
        self.calls: list[list[str]] = []
        self.environments: list[dict[str, str]] = []

    async def run(self, argv: Sequence[str], *, working_directory=None, environment=None) -> str:
        self.calls.append(list(argv))
        self.environments.append(dict(environment or {}))
        response = self.responses.get(tuple(argv[1:]), "")
        if isinstance(response, Exception):
            raise response
        return response


class RecordingSleeper:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def scripted_probe(outputs: Iterable[str | Exception]) -> Callable[[], object]:
    """Status probe returning (or raising) each item in turn."""

    items = list(outputs)
    state = {"calls": 0}

    async def probe() -> str:
        index = min(state["calls"], len(items) - 1)
        state["calls"] += 1
        item = items[index]
        if isinstance(item, Exception):
            raise item
        return item

    probe.state = state  # type: ignore[attr-defined]
    return probe


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for variable in EnvVar:
        monkeypatch.delenv(variable.value, raising=False)
    for key in list(os.environ):
        if key.startswith("CARDANO_TOOLS_"):
            monkeypatch.delenv(key, raising=False)
    yield
    # Facades publish the socket path straight into os.environ.
    for variable in EnvVar:
        os.environ.pop(variable.value, None)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        handshake_max_attempts=10,
        handshake_retry_delay_seconds=0.0,
        stop_grace_seconds=2.0,
    )


@pytest.fixture
def bin_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "bin"
    directory.mkdir()
    return directory


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., Config]:
    def _make(**cardano: object) -> Config:
        cardano.setdefault("working_dir", tmp_path / "work")
        return Config(
            cardano=CardanoConfig(**cardano),
            ogmios=OgmiosConfig(),
            kupo=KupoConfig(),
            mithril=MithrilConfig(),
        )

    return _make
