"""
Lazy, thread-safe loading of the aggregator's OpenPGP key.

The key is optional and only needed by the stages that sign or encrypt,
so it is read on first request rather than at configuration load. Many
fetch workers may ask for it at the same time; the file is opened and
parsed at most once per cache, and a failure is remembered for the rest
of the process.
"""

from __future__ import annotations

import threading
from enum import Enum
from typing import Any, Callable, Optional

from aggregator.core.errors import KeyLoadError
from aggregator.core.logging import LoggerMixin

KeyParser = Callable[[bytes], Any]


class KeyState(str, Enum):
    """Load state of a CryptoKeyCache."""
    EMPTY = "empty"
    RESOLVED = "resolved"
    FAILED = "failed"


def parse_armored_key(data: bytes) -> Any:
    """
    Parse an ASCII-armored OpenPGP key.

    Args:
        data: Raw content of the key file

    Returns:
        pgpy.PGPKey instance

    Raises:
        ValueError: If ``data`` is not a usable OpenPGP key
    """
    # PGPy is only needed when a key is configured
    import pgpy
    from pgpy.errors import PGPError

    try:
        key, _ = pgpy.PGPKey.from_blob(data)
    except PGPError as e:
        raise ValueError(str(e)) from e
    return key


class CryptoKeyCache(LoggerMixin):
    """
    Memoized loader for the key referenced by ``key`` in the configuration.

    States move from EMPTY to either RESOLVED or FAILED at most once. The
    lock is held for the whole load attempt so concurrent callers wait
    for the first attempt instead of starting their own.

    Parsers report an unusable key with ValueError. Anything else they
    raise (a missing PGPy install, say) propagates and leaves the cache
    EMPTY.
    """

    def __init__(self, path: str = "", parser: Optional[KeyParser] = None):
        self.path = path
        self._parse = parser or parse_armored_key
        self._lock = threading.Lock()
        self._state = KeyState.EMPTY
        self._key: Any = None
        self._error: Optional[KeyLoadError] = None

    @property
    def state(self) -> KeyState:
        return self._state

    def get(self) -> Any:
        """
        Return the parsed key.

        Returns:
            The key handle, or None when no key path is configured

        Raises:
            KeyLoadError: If the key file could not be read or parsed. The
                same error instance is raised on every later call.
        """
        if not self.path:
            return None

        with self._lock:
            if self._state is KeyState.EMPTY:
                self._load()
            if self._state is KeyState.FAILED:
                raise self._error
            return self._key

    def _load(self) -> None:
        """Read and parse the key file. Caller holds the lock."""
        self.logger.debug(f"Loading key from {self.path}")
        try:
            with open(self.path, "rb") as f:
                data = f.read()
            key = self._parse(data)
        except (OSError, ValueError) as e:
            self._error = KeyLoadError(
                f"cannot load key '{self.path}': {e}",
                path=self.path,
            )
            self._error.__cause__ = e
            self._state = KeyState.FAILED
            self.logger.error(self._error.message)
            return

        self._key = key
        self._state = KeyState.RESOLVED
        self.logger.debug(f"Key from {self.path} loaded")
