from __future__ import annotations

import logging
import threading
import time
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

PROBE_PREFIX = ".writo-test-"
LOCAL_DATA_SUBDIR = "local-data"


def is_writable_dir(directory: Path) -> bool:
    """Probe *directory* by writing and deleting a throwaway file.

    A probe file that cannot be removed afterwards counts as a failure.
    """
    try:
        if not directory.is_dir():
            return False
        probe = directory / f"{PROBE_PREFIX}{time.time_ns()}"
        probe.write_text("ok", encoding="utf-8")
        probe.unlink()
        return True
    except OSError as e:
        logger.debug("Data directory %s is not writable: %s", directory, e)
        return False


class DataDirectory:
    """Process-wide data root, resolved once and then cached.

    The preferred path (a production volume mount) wins when it already exists
    and is writable; otherwise the local fallback is created and used without
    probing, so a failure there surfaces as ``OSError``.
    """

    def __init__(self, preferred: Path, fallback: Optional[Path] = None):
        self.preferred = Path(preferred)
        self.fallback = Path(fallback) if fallback else None
        self._resolved: Optional[Path] = None
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config) -> "DataDirectory":
        return cls(config["DATA_DIR"], config.get("LOCAL_DATA_DIR"))

    @property
    def resolved(self) -> Optional[Path]:
        return self._resolved

    def resolve(self) -> Path:
        if self._resolved is not None:
            return self._resolved
        with self._lock:
            if self._resolved is None:
                self._resolved = self._select()
                logger.info("Using data directory %s", self._resolved)
        return self._resolved

    def _select(self) -> Path:
        preferred = self.preferred.absolute()
        if is_writable_dir(preferred):
            return preferred
        fallback = (self.fallback or Path.cwd() / LOCAL_DATA_SUBDIR).absolute()
        fallback.mkdir(parents=True, exist_ok=True)
        return fallback
