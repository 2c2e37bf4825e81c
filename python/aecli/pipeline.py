"""Shared pipeline plumbing for command orchestrators."""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

from .errors import AecliError, SdkError
from .result import Err, Ok, Result, Stage

log = logging.getLogger(__name__)

T = TypeVar("T")


class Pipeline:
    """Tracks the stage a single command invocation has reached."""

    def __init__(self, op: str) -> None:
        self.op = op
        self.stage = Stage.VALIDATING

    def enter(self, stage: Stage) -> None:
        self.stage = stage
        log.debug("%s: %s", self.op, stage.value)


def run_pipeline(op: str, body: Callable[[Pipeline], T]) -> Result[T]:
    """Run `body`, converting any AecliError into Err tagged with the failing stage."""
    p = Pipeline(op)
    log.debug("%s: %s", op, p.stage.value)
    try:
        value = body(p)
    except AecliError as e:
        log.debug("%s failed while %s: %s", op, p.stage.value, e)
        return Err(e, p.stage)
    p.enter(Stage.DONE)
    return Ok(value)


def invoke(fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Call into the SDK, mapping foreign exceptions onto SdkError."""
    try:
        return fn(*args, **kwargs)
    except AecliError:
        raise
    except Exception as e:
        log.debug("SDK call %s failed", getattr(fn, "__name__", fn), exc_info=True)
        raise SdkError(str(e) or type(e).__name__) from e


__all__ = ["Pipeline", "run_pipeline", "invoke"]
