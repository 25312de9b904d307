# src/codesum/core/aggregator.py
import logging
from typing import List, Optional

from codesum.core.channel import Receiver
from codesum.log import get_logger
from codesum.models import AggregationResult

async def concat_fragments(
    fragments: Receiver[str],
    logger: Optional[logging.Logger] = None,
) -> AggregationResult:
    """
    Drains the content channel until it is closed, joining fragments in
    arrival order and counting one file per fragment (empty ones included).
    """
    logger = logger or get_logger("aggregator")
    parts: List[str] = []
    async for fragment in fragments:
        parts.append(fragment)
    logger.debug("Concatenated %d fragments", len(parts))
    return AggregationResult(content="".join(parts), file_count=len(parts))
