# src/codesum/core/sequential.py
import asyncio
from typing import List

from codesum.core.reader import read_file
from codesum.core.strategy import Aggregator, RootPath
from codesum.core.walker import resolve_root, walk_files
from codesum.models import AggregationResult

class SequentialAggregator(Aggregator):
    """Walks and reads one file at a time, appending in discovery order."""

    name = "sequential"

    def aggregate(self, root: RootPath) -> AggregationResult:
        root_path = resolve_root(root)
        self.logger.debug("Aggregating %s sequentially", root_path)

        parts: List[str] = []
        for path in walk_files(root_path, self.options, self.logger):
            parts.append(read_file(path, self.logger))

        return AggregationResult(content="".join(parts), file_count=len(parts))

    async def aggregate_async(self, root: RootPath) -> AggregationResult:
        return await asyncio.to_thread(self.aggregate, root)
