from __future__ import annotations

import os
from dataclasses import dataclass

from lyricflow.core.contracts import DEFAULT_LRC_BY, BuildConfig, LrcGapPolicy, TranscriptionMode

_FALSY = ("0", "false", "no", "off")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    return raw.lower() not in _FALSY


@dataclass(frozen=True)
class AppConfig:
    """
    CLI runtime config (env-driven).

    The core functions never read the environment; this only seeds the
    defaults the CLI passes down.
    """

    log_level: str = "INFO"

    # LRC clear-marker policy
    lrc_gap_threshold: float = 4.0
    lrc_clear_offset: float = 1.0
    lrc_trailing_clear_offset: float = 4.0
    lrc_require_duration_bound: bool = True
    lrc_by: str = DEFAULT_LRC_BY

    # segment building
    clamp_words: bool = True
    drop_empty: bool = True

    def gap_policy(self) -> LrcGapPolicy:
        return LrcGapPolicy(
            gap_threshold=self.lrc_gap_threshold,
            clear_offset=self.lrc_clear_offset,
            trailing_clear_offset=self.lrc_trailing_clear_offset,
            require_duration_bound=self.lrc_require_duration_bound,
        )

    def build_config(self, mode: TranscriptionMode) -> BuildConfig:
        return BuildConfig.for_mode(mode, clamp_words=self.clamp_words, drop_empty=self.drop_empty)


def load_config() -> AppConfig:
    level = os.getenv("LYRICFLOW_LOG_LEVEL", "INFO").strip().upper()
    return AppConfig(
        log_level=level if level in _LOG_LEVELS else "INFO",
        lrc_gap_threshold=_env_float("LYRICFLOW_LRC_GAP_THRESHOLD", 4.0),
        lrc_clear_offset=_env_float("LYRICFLOW_LRC_CLEAR_OFFSET", 1.0),
        lrc_trailing_clear_offset=_env_float("LYRICFLOW_LRC_TRAILING_CLEAR_OFFSET", 4.0),
        lrc_require_duration_bound=_env_bool("LYRICFLOW_LRC_REQUIRE_DURATION_BOUND", True),
        lrc_by=os.getenv("LYRICFLOW_LRC_BY", "").strip() or DEFAULT_LRC_BY,
        clamp_words=_env_bool("LYRICFLOW_CLAMP_WORDS", True),
        drop_empty=_env_bool("LYRICFLOW_DROP_EMPTY", True),
    )
