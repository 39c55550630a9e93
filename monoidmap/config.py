"""Runtime settings, read from the environment (and a ``.env`` file).

MONOIDMAP_CHECK_INVARIANTS
    When truthy (``1``, ``true``, ``yes``, ``on``), every map produced by the
    core constructors is validated with :func:`monoidmap.check.check_map`
    and an :class:`~monoidmap.errors.InvariantError` is raised on violation.
    Useful while developing a new value type; costs a full traversal per
    operation.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class Settings:
    check_invariants: bool = False

    @classmethod
    def from_env(cls) -> Settings:
        load_dotenv()
        raw = os.getenv("MONOIDMAP_CHECK_INVARIANTS", "")
        return cls(check_invariants=raw.strip().lower() in _TRUTHY)


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
        if _settings.check_invariants:
            logger.warning(
                "MONOIDMAP_CHECK_INVARIANTS is enabled: every map is validated"
            )
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
