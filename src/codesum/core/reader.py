# src/codesum/core/reader.py
import logging
from pathlib import Path
from typing import Optional

import aiofiles

from codesum.errors import FileReadError
from codesum.log import get_logger

# Strict UTF-8 with line endings kept as they are on disk
ENCODING = "utf-8"
NEWLINE = ""

def read_file(path: Path, logger: Optional[logging.Logger] = None) -> str:
    """
    Reads the whole file as text. On failure the error is logged and an
    empty string stands in for the content, so the file still counts.
    """
    logger = logger or get_logger("reader")
    try:
        with open(path, "r", encoding=ENCODING, newline=NEWLINE) as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.error("%s", FileReadError(path, e))
        return ""
    logger.debug("Read %s (%d chars)", path, len(content))
    return content

async def read_file_async(path: Path, logger: Optional[logging.Logger] = None) -> str:
    """Non-blocking twin of read_file, with the same failure policy."""
    logger = logger or get_logger("reader")
    try:
        async with aiofiles.open(path, "r", encoding=ENCODING, newline=NEWLINE) as f:
            content = await f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.error("%s", FileReadError(path, e))
        return ""
    logger.debug("Read %s (%d chars)", path, len(content))
    return content
