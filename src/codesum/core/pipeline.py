# src/codesum/core/pipeline.py
"""Three-stage pipeline: walker -> reader pool -> aggregator.

The stages run as asyncio tasks joined by two channels. The walker runs the
blocking traversal in a worker thread and hands every path over to the event
loop; readers turn each path into exactly one fragment (empty on failure);
the aggregator drains fragments until the content channel closes.
"""
import asyncio
import logging
from pathlib import Path
from typing import List, Optional

from codesum.config import DEFAULT_MAX_WORKERS
from codesum.core.aggregator import concat_fragments
from codesum.core.channel import Receiver, Sender, open_channel
from codesum.core.reader import read_file_async
from codesum.core.strategy import Aggregator, RootPath
from codesum.core.walker import resolve_root, walk_files
from codesum.models import AggregationResult, WalkOptions

class ConcurrentAggregator(Aggregator):
    """
    Reads files concurrently. ``max_workers`` caps reads in flight with a
    fixed pool of reader tasks; ``None`` spawns one task per discovered file.
    Fragments are joined in arrival order, which may differ between runs.
    """

    name = "concurrent"

    def __init__(
        self,
        options: Optional[WalkOptions] = None,
        logger: Optional[logging.Logger] = None,
        max_workers: Optional[int] = DEFAULT_MAX_WORKERS,
    ):
        super().__init__(options, logger)
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be a positive integer or None, got {max_workers!r}")
        self.max_workers = max_workers

    def aggregate(self, root: RootPath) -> AggregationResult:
        return asyncio.run(self.aggregate_async(root))

    async def aggregate_async(self, root: RootPath) -> AggregationResult:
        root_path = resolve_root(root)
        self.logger.debug("Aggregating %s concurrently (max_workers=%s)", root_path, self.max_workers)

        path_tx, path_rx = open_channel()
        content_tx, content_rx = open_channel()

        walk_task = asyncio.create_task(self._walk(root_path, path_tx))
        read_task = asyncio.create_task(self._read(path_rx, content_tx))
        concat_task = asyncio.create_task(concat_fragments(content_rx, self.logger))
        tasks = (walk_task, read_task, concat_task)

        try:
            await walk_task
            await read_task
            return await concat_task
        finally:
            pending = [task for task in tasks if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

    async def _walk(self, root: Path, paths: Sender[Path]) -> None:
        loop = asyncio.get_running_loop()

        def publish() -> None:
            for path in walk_files(root, self.options, self.logger):
                loop.call_soon_threadsafe(paths.send, path)

        # Sends scheduled by publish() run before this coroutine resumes
        with paths:
            await asyncio.to_thread(publish)

    async def _read(self, paths: Receiver[Path], fragments: Sender[str]) -> None:
        with fragments:
            if self.max_workers is None:
                await self._read_unbounded(paths, fragments)
            else:
                workers = [
                    asyncio.create_task(self._read_worker(paths, fragments.clone()))
                    for _ in range(self.max_workers)
                ]
                await asyncio.gather(*workers)

    async def _read_worker(self, paths: Receiver[Path], fragments: Sender[str]) -> None:
        with fragments:
            async for path in paths:
                fragments.send(await read_file_async(path, self.logger))

    async def _read_unbounded(self, paths: Receiver[Path], fragments: Sender[str]) -> None:
        tasks: List[asyncio.Task] = []
        async for path in paths:
            tasks.append(asyncio.create_task(self._read_one(path, fragments.clone())))
        self.logger.debug("Spawned %d read tasks", len(tasks))
        await asyncio.gather(*tasks)

    async def _read_one(self, path: Path, fragments: Sender[str]) -> None:
        with fragments:
            fragments.send(await read_file_async(path, self.logger))
