# src/codesum/core/strategy.py
import abc
import logging
import os
from typing import Optional, Union

from codesum.log import get_logger
from codesum.models import AggregationResult, WalkOptions

RootPath = Union[str, os.PathLike]

class Aggregator(abc.ABC):
    """
    Turns a directory tree into one AggregationResult.

    Every strategy can be driven both ways: ``aggregate`` blocks until the
    result is ready, ``aggregate_async`` is awaited from inside an event loop.
    Only FatalPathError escapes either call; per-entry failures are logged.
    """

    name = "aggregator"

    def __init__(self, options: Optional[WalkOptions] = None, logger: Optional[logging.Logger] = None):
        self.options = options or WalkOptions()
        self.logger = logger or get_logger(self.name)

    @abc.abstractmethod
    def aggregate(self, root: RootPath) -> AggregationResult:
        ...

    @abc.abstractmethod
    async def aggregate_async(self, root: RootPath) -> AggregationResult:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(options={self.options!r})"
