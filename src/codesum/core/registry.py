# src/codesum/core/registry.py
from typing import Dict, Type

from codesum.core.pipeline import ConcurrentAggregator
from codesum.core.sequential import SequentialAggregator
from codesum.core.strategy import Aggregator

STRATEGIES: Dict[str, Type[Aggregator]] = {
    SequentialAggregator.name: SequentialAggregator,
    ConcurrentAggregator.name: ConcurrentAggregator,
}

def create_aggregator(name: str, **options) -> Aggregator:
    """Builds the strategy registered under ``name`` with the given options."""
    try:
        cls = STRATEGIES[name]
    except KeyError:
        known = ", ".join(sorted(STRATEGIES))
        raise ValueError(f"Unknown strategy {name!r} (expected one of: {known})") from None
    return cls(**options)
