from __future__ import annotations

import os
from pathlib import Path

import pytest

from conftest import write_script
from core.domain.errors import BinaryNotFound, NotExecutable
from core.domain.semver import SemVer
from core.services.binary_resolver import (
    check_binary,
    describe_binary,
    ensure_working_directory,
    resolve_binary,
    search_path,
)


def test_explicit_executable_path(bin_dir: Path) -> None:
    binary = write_script(bin_dir, "cardano-cli", "echo hi")
    assert resolve_binary("cardano-cli", binary) == binary.absolute()


def test_explicit_missing_path(tmp_path: Path) -> None:
    with pytest.raises(BinaryNotFound):
        resolve_binary("cardano-cli", tmp_path / "missing")


def test_directory_is_not_executable(tmp_path: Path) -> None:
    with pytest.raises(NotExecutable):
        check_binary(tmp_path)


@pytest.mark.skipif(hasattr(os, "geteuid") and os.geteuid() == 0, reason="root bypasses permission bits")
def test_file_without_execute_bit(bin_dir: Path) -> None:
    binary = write_script(bin_dir, "kupo", "echo v2.3.4", executable=False)
    with pytest.raises(NotExecutable):
        resolve_binary("kupo", binary)


def test_empty_name_is_not_found() -> None:
    with pytest.raises(BinaryNotFound):
        resolve_binary("")
    with pytest.raises(BinaryNotFound):
        search_path("  ")


def test_search_path_first_match_wins(tmp_path: Path) -> None:
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    expected = write_script(first, "ogmios", "echo v6.13.0")
    write_script(second, "ogmios", "echo v6.14.0")

    path_env = os.pathsep.join([str(tmp_path / "empty"), str(first), str(second)])
    assert search_path("ogmios", path_env=path_env) == expected.absolute()


def test_search_path_skips_directories_with_same_name(tmp_path: Path) -> None:
    (tmp_path / "a" / "kupo").mkdir(parents=True)
    (tmp_path / "b").mkdir()
    expected = write_script(tmp_path / "b", "kupo", "echo v2.3.4")
    path_env = os.pathsep.join([str(tmp_path / "a"), str(tmp_path / "b")])
    assert search_path("kupo", path_env=path_env) == expected.absolute()


def test_search_path_not_found(tmp_path: Path) -> None:
    with pytest.raises(BinaryNotFound):
        search_path("cardano-node", path_env=str(tmp_path))


def test_describe_binary(bin_dir: Path) -> None:
    binary = write_script(bin_dir, "cardano-node", "echo")
    descriptor = describe_binary("cardano-node", "8.0.0", binary)
    assert descriptor.name == "cardano-node"
    assert descriptor.minimum_version == SemVer(8, 0, 0)
    assert descriptor.resolved_path == binary.absolute()
    with pytest.raises(Exception):
        descriptor.name = "other"  # type: ignore[misc]


def test_working_directory_created_with_parents(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "c"
    created = ensure_working_directory(target)
    assert created.is_dir()
    assert os.access(target, os.W_OK)
    assert os.access(tmp_path / "a", os.W_OK)


def test_existing_working_directory_untouched(tmp_path: Path) -> None:
    marker = tmp_path / "keep.txt"
    marker.write_text("x", encoding="utf-8")
    assert ensure_working_directory(tmp_path) == tmp_path.absolute()
    assert marker.exists()


def test_working_directory_under_a_file_fails(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(OSError):
        ensure_working_directory(blocker / "child")
    with pytest.raises(OSError):
        ensure_working_directory(blocker)
