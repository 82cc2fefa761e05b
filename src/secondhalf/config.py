"""
Global configuration for the SecondHalf project.

This module centralizes paths, generation parameters and endpoint settings,
so you can tweak them in one place.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

# Project root = folder that contains "src", "data", etc.
PROJECT_ROOT: Path = Path(__file__).resolve().parents[2]

# Local per-device storage
DATA_DIR: Path = PROJECT_ROOT / "data"
LOCAL_STORAGE_FILENAME: str = "local_storage.json"
HISTORY_SLOT: str = "predictionHistory"

# Generation parameters sent with every request
TEMPERATURE: float = 0.7
TOP_K: int = 40
TOP_P: float = 0.95
MAX_OUTPUT_TOKENS: int = 1024

# Deadline for a single call to the inference endpoint (seconds).
# None means wait indefinitely.
DEFAULT_TIMEOUT_SECONDS: Optional[float] = 60.0

# Environment variable names
ENV_API_URL: str = "SECONDHALF_API_URL"
ENV_API_KEY: str = "SECONDHALF_API_KEY"
ENV_TIMEOUT: str = "SECONDHALF_TIMEOUT_SECONDS"
ENV_HISTORY_PATH: str = "SECONDHALF_HISTORY_PATH"


@dataclass(frozen=True)
class ClientConfig:
    """Endpoint settings injected into the prediction client."""

    api_url: str = ""
    api_key: str = ""
    timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS

    def __repr__(self) -> str:
        masked = "***" if self.api_key else ""
        return (
            f"ClientConfig(api_url={self.api_url!r}, api_key={masked!r}, "
            f"timeout={self.timeout!r})"
        )


def _parse_timeout(raw: str | None) -> Optional[float]:
    if raw is None or raw.strip() == "":
        return DEFAULT_TIMEOUT_SECONDS
    value = raw.strip().lower()
    if value in ("none", "0", "off"):
        return None
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"{ENV_TIMEOUT} must be a number, got {raw!r}") from exc


def load_client_config(environ: Mapping[str, str] | None = None) -> ClientConfig:
    """
    Build a ClientConfig from the hosting environment.

    Missing values are kept empty here; the client refuses to send a request
    without them.

    Parameters
    ----------
    environ : Mapping[str, str] | None
        Source of variables. Defaults to ``os.environ``.

    Returns
    -------
    ClientConfig
        Endpoint URL, API key and deadline.
    """
    env = os.environ if environ is None else environ
    return ClientConfig(
        api_url=env.get(ENV_API_URL, "").strip(),
        api_key=env.get(ENV_API_KEY, "").strip(),
        timeout=_parse_timeout(env.get(ENV_TIMEOUT)),
    )
