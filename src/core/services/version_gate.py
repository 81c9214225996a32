"""Minimum-version gate applied once when a façade is constructed."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from core.domain.errors import UnsupportedVersion
from core.domain.semver import SemVer

logger = logging.getLogger(__name__)

VersionProbe = Callable[[], Awaitable[str]]


def check_version_text(raw: str, minimum: SemVer | str, *, binary_name: str = "binary") -> SemVer:
    """Parse `raw` and compare it against `minimum`.

    Raises `InvalidOutput` if no version triple is present and
    `UnsupportedVersion` if the parsed version is lower than `minimum`.
    """

    floor = minimum if isinstance(minimum, SemVer) else SemVer.parse(minimum)
    current = SemVer.parse(raw)
    logger.debug("%s version: %s (minimum %s)", binary_name, current, floor)

    if current < floor:
        logger.warning(
            "Unsupported %s version %s, minimum supported version is %s",
            binary_name,
            current,
            floor,
        )
        raise UnsupportedVersion(str(current), str(floor))
    return current


class VersionGate:
    """Runs a version probe and enforces the minimum.

    The probe is any coroutine function returning the binary's raw version
    banner (usually the executor invoked with `--version`, `version` or `help`).
    """

    def __init__(self, probe: VersionProbe, minimum: SemVer | str, *, binary_name: str = "binary") -> None:
        self._probe = probe
        self._minimum = minimum if isinstance(minimum, SemVer) else SemVer.parse(minimum)
        self._binary_name = binary_name

    @property
    def minimum(self) -> SemVer:
        return self._minimum

    async def check(self) -> SemVer:
        raw = await self._probe()
        return check_version_text(raw, self._minimum, binary_name=self._binary_name)
