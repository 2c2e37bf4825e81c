"""Network configuration for aecli.

Settings resolve in this order (highest first):
  1. Command-line flags (--url, --compilerUrl, ...)
  2. Environment variables (AECLI_URL, AECLI_COMPILER_URL, ...)
  3. Built-in mainnet defaults
"""
from __future__ import annotations

import os
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Optional

DEFAULT_URL = "https://mainnet.aeternity.io"
DEFAULT_COMPILER_URL = "https://compiler.aepps.com"
DEFAULT_NETWORK_ID = "ae_mainnet"
DEFAULT_TIMEOUT = 30.0


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    return v if v is not None and v != "" else default


def _ensure_http(url: str) -> str:
    lower = url.lower()
    if not (lower.startswith("http://") or lower.startswith("https://")):
        raise ValueError(f"URL must start with http:// or https://, got: {url!r}")
    return url.rstrip("/")


@dataclass(frozen=True)
class NetworkConfig:
    url: str = DEFAULT_URL
    internal_url: str = DEFAULT_URL
    compiler_url: str = DEFAULT_COMPILER_URL
    network_id: str = DEFAULT_NETWORK_ID
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        object.__setattr__(self, "url", _ensure_http(self.url))
        object.__setattr__(self, "internal_url", _ensure_http(self.internal_url))
        object.__setattr__(self, "compiler_url", _ensure_http(self.compiler_url))
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got: {self.timeout!r}")

    def with_overrides(self, **overrides: Any) -> "NetworkConfig":
        """Return a copy with the non-None overrides applied. Unknown keys are ignored."""
        known = set(asdict(self))
        changes = {k: v for k, v in overrides.items() if k in known and v is not None}
        if "url" in changes and "internal_url" not in changes and self.internal_url == self.url:
            changes["internal_url"] = changes["url"]
        return replace(self, **changes) if changes else self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_network_config() -> NetworkConfig:
    url = _env("AECLI_URL", DEFAULT_URL)
    return NetworkConfig(
        url=url,
        internal_url=_env("AECLI_INTERNAL_URL", url),
        compiler_url=_env("AECLI_COMPILER_URL", DEFAULT_COMPILER_URL),
        network_id=_env("AECLI_NETWORK_ID", DEFAULT_NETWORK_ID),
        timeout=float(_env("AECLI_TIMEOUT", str(DEFAULT_TIMEOUT))),
    )


__all__ = [
    "NetworkConfig",
    "load_network_config",
    "DEFAULT_URL",
    "DEFAULT_COMPILER_URL",
    "DEFAULT_NETWORK_ID",
    "DEFAULT_TIMEOUT",
]
