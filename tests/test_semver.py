from __future__ import annotations

import pytest

from core.domain.errors import InvalidOutput
from core.domain.semver import SemVer, parse_semver


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("cardano-node 8.1.2 - linux-x86_64 - ghc-9.2", SemVer(8, 1, 2)),
        ("v6.13.0 (4e93e254)", SemVer(6, 13, 0)),
        ("cardano-signer 1.17.0-beta", SemVer(1, 17, 0)),
        ("mithril-client 0.12.38+254d6a5", SemVer(0, 12, 38)),
        ("Cardano HW CLI version 1.10.0\n", SemVer(1, 10, 0)),
        ("v2.3.4", SemVer(2, 3, 4)),
    ],
)
def test_parse_semver_finds_first_triple(text: str, expected: SemVer) -> None:
    assert parse_semver(text) == expected


@pytest.mark.parametrize("text", ["", "no version here", "8.1", "version x.y.z", None])
def test_parse_semver_without_triple(text: str | None) -> None:
    assert parse_semver(text) is None


def test_parse_raises_invalid_output() -> None:
    with pytest.raises(InvalidOutput) as exc:
        SemVer.parse("kupo nightly")
    assert exc.value.output == "kupo nightly"


def test_ordering_is_numeric_not_lexicographic() -> None:
    assert SemVer.parse("10.0.0") > SemVer.parse("9.0.0")
    assert SemVer.parse("1.10.0") > SemVer.parse("1.9.9")
    assert SemVer.parse("2.4.3") == SemVer(2, 4, 3)
    assert str(SemVer(0, 12, 38)) == "0.12.38"


def test_negative_components_rejected() -> None:
    with pytest.raises(ValueError):
        SemVer(1, -1, 0)
