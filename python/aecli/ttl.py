"""
Oracle TTL descriptors.

Command-line TTL values are decided once, at the boundary, into one of:

- RelativeTtl(n)   valid for n blocks from now  -> {"type": "delta", "value": n}
- AbsoluteTtl(h)   valid until key block h      -> {"type": "block", "value": h}
- OpaqueTtl(raw)   anything that is not a plain integer

`normalize_oracle_ttl` never fails; `resolve_ttl` applies the single policy
used for every TTL-bearing field before the SDK sees it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .errors import InvalidTtl

__all__ = [
    "RelativeTtl",
    "AbsoluteTtl",
    "OpaqueTtl",
    "TtlSpec",
    "normalize_oracle_ttl",
    "resolve_ttl",
]

_DESCRIPTOR_RE = re.compile(r"^\s*(delta|block)\s*:\s*(\d+)\s*$")


@dataclass(frozen=True)
class RelativeTtl:
    value: int

    def descriptor(self) -> Dict[str, Any]:
        return {"type": "delta", "value": self.value}

    def to_absolute(self, height: int) -> "AbsoluteTtl":
        return AbsoluteTtl(height + self.value)


@dataclass(frozen=True)
class AbsoluteTtl:
    value: int

    def descriptor(self) -> Dict[str, Any]:
        return {"type": "block", "value": self.value}


@dataclass(frozen=True)
class OpaqueTtl:
    raw: Any


TtlSpec = Union[RelativeTtl, AbsoluteTtl, OpaqueTtl]


def normalize_oracle_ttl(raw: Any) -> Optional[TtlSpec]:
    """
    Integers (or strings holding one) become RelativeTtl; anything else is
    wrapped unchanged in OpaqueTtl. None means "field not set".
    """
    if raw is None:
        return None
    if isinstance(raw, (RelativeTtl, AbsoluteTtl, OpaqueTtl)):
        return raw
    if isinstance(raw, bool):
        return OpaqueTtl(raw)
    if isinstance(raw, int):
        return RelativeTtl(raw)
    try:
        return RelativeTtl(int(str(raw).strip()))
    except ValueError:
        return OpaqueTtl(raw)


def resolve_ttl(spec: Optional[TtlSpec], field: str) -> Optional[Union[RelativeTtl, AbsoluteTtl]]:
    """
    Resolve a normalized TTL for the SDK.

    Opaque values are accepted only as explicit ``delta:<n>`` / ``block:<h>``
    descriptors; negative values are rejected.
    """
    if spec is None:
        return None
    if isinstance(spec, OpaqueTtl):
        m = _DESCRIPTOR_RE.match(str(spec.raw)) if isinstance(spec.raw, str) else None
        if m is None:
            raise InvalidTtl(f"{field} should be a number", field=field, value=spec.raw)
        kind, value = m.group(1), int(m.group(2))
        spec = RelativeTtl(value) if kind == "delta" else AbsoluteTtl(value)
    if spec.value < 0:
        raise InvalidTtl(f"{field} should be a non-negative number", field=field, value=spec.value)
    return spec
