"""Per-invocation state shared by all command groups through ``ctx.obj``."""

from __future__ import annotations

from dataclasses import dataclass

import typer

from ..config import NetworkConfig, load_network_config

__all__ = ["CliContext", "get_context"]


@dataclass
class CliContext:
    config: NetworkConfig
    json_output: bool = False
    verbose: bool = False

    def json_mode(self, flag: bool) -> bool:
        return self.json_output or flag


def get_context(ctx: typer.Context) -> CliContext:
    # commands invoked without the root callback (e.g. a sub-app in tests)
    if not isinstance(ctx.obj, CliContext):
        ctx.obj = CliContext(config=load_network_config())
    return ctx.obj
