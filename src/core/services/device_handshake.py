"""Hardware-wallet handshake.

Polls the wallet bridge (`cardano-hw-cli device version`) until the device
reports an open Cardano app, classifies the vendor and checks the reported
app/firmware version against the vendor minimum.

Rules:
- Every poll counts as an attempt; the budget is `max_attempts` polls.
- The delay between polls comes from an injectable backoff strategy and is
  awaited through an injectable sleeper, so it is cancellable and testable.
- Cancellation propagates as `asyncio.CancelledError`.
- A firmware/app version below the vendor minimum is only logged.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Mapping

from core.domain.errors import (
    CardanoToolsError,
    DeviceUnreachable,
    DeviceVendorMismatch,
    UnsupportedDeviceVendor,
)
from core.domain.models import DeviceSession, HardwareWalletType
from core.domain.semver import SemVer, parse_semver
from core.interfaces.binary import Sleeper

logger = logging.getLogger(__name__)

StatusProbe = Callable[[], Awaitable[str]]
BackoffStrategy = Callable[[int], float]

DEFAULT_MAX_ATTEMPTS = 10
DEFAULT_RETRY_DELAY_SECONDS = 10.0

VENDOR_MINIMUMS: dict[HardwareWalletType, SemVer] = {
    HardwareWalletType.LEDGER: SemVer(4, 0, 0),
    HardwareWalletType.TREZOR: SemVer(2, 4, 3),
}

# Present in `device version` output once the Cardano app is open.
_UNLOCKED_MARKERS = ("app version", "undefined")


def fixed_backoff(delay_seconds: float) -> BackoffStrategy:
    """Same delay after every failed attempt."""

    def _delay(_attempt: int) -> float:
        return delay_seconds

    return _delay


def is_unlocked(status: str) -> bool:
    return any(marker in status for marker in _UNLOCKED_MARKERS)


def classify_vendor(status: str) -> HardwareWalletType | None:
    if "Ledger" in status:
        return HardwareWalletType.LEDGER
    if "Trezor" in status:
        return HardwareWalletType.TREZOR
    return None


def reported_version(status: str) -> str:
    """Last whitespace-delimited token of the status text."""

    tokens = status.split()
    return tokens[-1] if tokens else ""


class DeviceHandshake:
    """Bounded-retry handshake against one connected hardware wallet.

    A single instance never runs two handshakes at once; concurrent `run`
    calls are serialized.
    """

    def __init__(
        self,
        status_probe: StatusProbe,
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        backoff: BackoffStrategy | None = None,
        sleeper: Sleeper | None = None,
        vendor_minimums: Mapping[HardwareWalletType, SemVer] | None = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._probe = status_probe
        self._max_attempts = max_attempts
        self._backoff = backoff or fixed_backoff(DEFAULT_RETRY_DELAY_SECONDS)
        self._sleep = sleeper or asyncio.sleep
        self._minimums = dict(vendor_minimums or VENDOR_MINIMUMS)
        self._lock = asyncio.Lock()

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    async def run(self, only_for: HardwareWalletType | None = None) -> DeviceSession:
        async with self._lock:
            logger.info("Preparing hardware wallet...")
            logger.info(
                "Please connect & unlock your Hardware Wallet, open the Cardano App on Ledger devices"
            )
            session = await self._poll()
            return self._validate(session, only_for)

    async def _poll(self) -> DeviceSession:
        attempts = 0
        status = ""
        unlocked = False

        while not unlocked and attempts < self._max_attempts:
            attempts += 1
            try:
                status = await self._probe()
            except (CardanoToolsError, OSError) as err:
                logger.warning("Device check failed (attempt %d/%d): %s", attempts, self._max_attempts, err)
            else:
                unlocked = is_unlocked(status)
                if not unlocked:
                    logger.warning(
                        "Device locked or Cardano app not open (attempt %d/%d)",
                        attempts,
                        self._max_attempts,
                    )

            if not unlocked and attempts < self._max_attempts:
                delay = self._backoff(attempts)
                logger.info("Retrying in %.1f seconds...", delay)
                await self._sleep(delay)

        if not unlocked:
            raise DeviceUnreachable(self._max_attempts)

        return DeviceSession(
            attempts_used=attempts,
            max_attempts=self._max_attempts,
            unlocked=True,
            status_text=status,
        )

    def _validate(self, session: DeviceSession, only_for: HardwareWalletType | None) -> DeviceSession:
        vendor = classify_vendor(session.status_text)
        if vendor is None:
            raise UnsupportedDeviceVendor(session.status_text)

        version = reported_version(session.status_text)
        minimum = self._minimums.get(vendor)
        label = "Cardano app" if vendor is HardwareWalletType.LEDGER else "firmware"
        logger.info("%s %s version: %s, minimum required: %s", vendor.display_name, label, version, minimum)

        parsed = parse_semver(version)
        if minimum is not None and (parsed is None or parsed < minimum):
            logger.warning(
                "%s %s version %s is below the supported minimum %s",
                vendor.display_name,
                label,
                version or "<unknown>",
                minimum,
            )

        if only_for is not None and vendor is not only_for:
            raise DeviceVendorMismatch(vendor.display_name, only_for.display_name)

        logger.info("Hardware wallet (%s) ready. Please approve actions on your device.", vendor.display_name)
        return session.model_copy(update={"vendor": vendor, "reported_version": version})
