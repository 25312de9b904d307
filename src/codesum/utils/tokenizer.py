# src/codesum/utils/tokenizer.py
import tiktoken

from codesum.log import get_logger

ENCODING_NAME = "cl100k_base"
FALLBACK_ENCODING_NAME = "p50k_base"

logger = get_logger("tokenizer")

class Tokenizer:
    _encoding = None

    @classmethod
    def get_encoding(cls):
        if cls._encoding is None:
            try:
                cls._encoding = tiktoken.get_encoding(ENCODING_NAME)
            except Exception:
                logger.debug("Encoding %s unavailable, trying %s", ENCODING_NAME, FALLBACK_ENCODING_NAME)
                cls._encoding = tiktoken.get_encoding(FALLBACK_ENCODING_NAME)
        return cls._encoding

    @staticmethod
    def count(text: str) -> int:
        """Estimates token count for a given text."""
        try:
            encoding = Tokenizer.get_encoding()
            return len(encoding.encode(text, disallowed_special=()))
        except Exception as e:
            # BPE files may be unreachable offline; fall back to ~4 chars per token
            logger.info("Token estimate falling back to character count: %s", e)
            return len(text) // 4
