from courtside.aggregation.aggregator import Aggregator
from courtside.aggregation.errors import AggregationError, UnknownLeagueError
from courtside.aggregation.fallback import FallbackAggregator, FallbackStore, StaticFallbackStore
from courtside.aggregation.leagues import LeagueRoute, build_default_registry, predefined_routes

__all__ = [
    "AggregationError",
    "Aggregator",
    "FallbackAggregator",
    "FallbackStore",
    "LeagueRoute",
    "StaticFallbackStore",
    "UnknownLeagueError",
    "build_default_registry",
    "predefined_routes",
]
