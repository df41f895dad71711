from __future__ import annotations

from dataclasses import dataclass
import os

from .decoder import DEFAULT_REFERENCE_MAX_FLOATING

_FALSE_VALUES = {"0", "false", "off", "no", ""}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip(), 0)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class MaskmemConfig:
    trace: bool
    verify_max_floating: int


def load_config() -> MaskmemConfig:
    trace = os.getenv("MASKMEM_TRACE", "").strip().casefold() not in _FALSE_VALUES
    return MaskmemConfig(
        trace=trace,
        verify_max_floating=_env_int(
            "MASKMEM_VERIFY_MAX_FLOATING", DEFAULT_REFERENCE_MAX_FLOATING
        ),
    )


__all__ = ["MaskmemConfig", "load_config"]
