from __future__ import annotations

import asyncio
import json
from collections.abc import Coroutine
from typing import Any, TypeVar

import typer

from courtside.aggregation.aggregator import Aggregator
from courtside.aggregation.errors import AggregationError
from courtside.aggregation.fallback import FallbackAggregator, StaticFallbackStore
from courtside.aggregation.leagues import build_default_registry
from courtside.core.enums import PartialFailurePolicyEnum
from courtside.core.logging import logger

T = TypeVar("T")


def build_aggregator(policy: PartialFailurePolicyEnum | None = None) -> FallbackAggregator:
    """
    Live aggregator behind the fallback wrapper. With USE_MOCK_FALLBACK off
    (the default) the wrapper passes every failure through; with it on, a
    failed league answers with the (empty) static store.
    """
    aggregator = Aggregator(registry=build_default_registry())
    if policy is not None:
        aggregator.default_policy = policy
    return FallbackAggregator(aggregator=aggregator, store=StaticFallbackStore())


def run_or_exit(coro: Coroutine[Any, Any, T]) -> T:
    """
    Drive one aggregator call for a CLI command.
    Aggregation failures exit with status 1 and a one-line message on stderr.
    """
    try:
        return asyncio.run(coro)
    except AggregationError as e:
        logger.error(
            "cli_command_failed",
            league_id=e.league_id,
            provider=e.provider,
            status_code=e.status_code,
        )
        typer.echo(f"error: {e.message}", err=True)
        raise typer.Exit(code=1) from e


def echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
