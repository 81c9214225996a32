"""Semantic version triples extracted from free-form binary output.

Binaries report their version inside longer banners
(``cardano-node 8.1.2 - linux-x86_64 - ghc-9.2``, ``v6.13.0 (4e93e254)``),
so parsing is deliberately tolerant: the first ``\\d+.\\d+.\\d+`` substring wins
and any pre-release/build suffix after it is ignored.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from core.domain.errors import InvalidOutput

_TRIPLE = re.compile(r"(\d+)\.(\d+)\.(\d+)")


@dataclass(frozen=True, order=True)
class SemVer:
    """A (major, minor, patch) triple with purely numeric ordering."""

    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        if min(self.major, self.minor, self.patch) < 0:
            raise ValueError(f"version components must be non-negative: {self.as_tuple()}")

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    @classmethod
    def parse(cls, text: str) -> "SemVer":
        """Parse the first version triple in `text` or raise `InvalidOutput`."""

        version = parse_semver(text)
        if version is None:
            raise InvalidOutput(f"Could not parse version from: {text!r}", output=text)
        return version


def parse_semver(text: str | None) -> SemVer | None:
    """Return the first version triple found anywhere in `text`, if any."""

    if not text:
        return None
    match = _TRIPLE.search(text)
    if match is None:
        return None
    major, minor, patch = (int(part) for part in match.groups())
    return SemVer(major, minor, patch)


def is_at_least(current: SemVer, minimum: SemVer) -> bool:
    return current >= minimum
