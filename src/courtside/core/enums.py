from __future__ import annotations

from enum import StrEnum


class ProviderEnum(StrEnum):
    GENIUS_SPORTS = "geniussports"
    EUROLEAGUE = "euroleague"
    INCROWD = "incrowd"
    API_SPORTS = "apisports"


class MatchStatusEnum(StrEnum):
    SCHEDULED = "scheduled"
    LIVE = "live"
    COMPLETED = "completed"


class LivePeriodEnum(StrEnum):
    Q1 = "Q1"
    Q2 = "Q2"
    HALF_TIME = "Half-time"
    Q3 = "Q3"
    Q4 = "Q4"
    OVERTIME = "OT"
    FULL_TIME = "Full Time"


class SourceModeEnum(StrEnum):
    SINGLE = "single-source"
    DUAL = "dual-source"


class PartialFailurePolicyEnum(StrEnum):
    STRICT = "strict"
    TOLERANT = "tolerant"
