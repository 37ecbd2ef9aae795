from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from courtside.ingestion.providers.base.errors import ProviderParseError

Json = dict[str, Any]


@dataclass(frozen=True)
class JsonEnvelope:
    data: list[Json]
    metadata: Json = field(default_factory=dict)


def parse_json_envelope(
    payload: Any,
    *,
    discriminator: str = "status",
    expected: str = "success",
    data_key: str = "data",
) -> JsonEnvelope:
    """
    Validate a ``{status, data[], metadata}`` envelope before trusting it.

    A missing or mismatched discriminator is a failure, never an empty result.
    Non-object entries in ``data`` are dropped.
    """
    if not isinstance(payload, dict):
        raise ProviderParseError(f"Expected JSON object envelope, got {type(payload)}")

    marker = payload.get(discriminator)
    if marker != expected:
        raise ProviderParseError(
            f"Unexpected envelope {discriminator}={marker!r} (expected {expected!r})"
        )

    items = payload.get(data_key)
    if not isinstance(items, list):
        raise ProviderParseError(f"Envelope '{data_key}' is not a list: {type(items)}")

    metadata = payload.get("metadata")
    return JsonEnvelope(
        data=[i for i in items if isinstance(i, dict)],
        metadata=metadata if isinstance(metadata, dict) else {},
    )
