"""Corpus reading and dictionary construction."""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from tweetgen.errors import LineTooLongError, TokenTooLongError
from tweetgen.models.dictionary import Dictionary, Word


logger = logging.getLogger(__name__)

# Older callers pass -1 to mean "no limit".
LEGACY_READ_ALL = -1


@dataclass
class IngestConfig:
    """Limits applied while reading a corpus."""
    max_token_length: int = 99
    max_line_length: int = 999
    max_words: int = 0


@dataclass
class IngestStats:
    tokens: int = 0
    lines: int = 0
    capped: bool = False


def normalize_read_cap(max_words: Optional[int]) -> int:
    """Map the user-facing read cap onto 0 (read all) or a positive limit."""
    if max_words is None or max_words == LEGACY_READ_ALL:
        return 0
    if max_words < 0:
        raise ValueError(f"max words to read must be >= 0, got {max_words}")
    return max_words


def tokenize(line: str, line_number: int, config: IngestConfig) -> list[str]:
    """Split one corpus line into tokens, enforcing the length limits."""
    text = line.rstrip('\r\n')
    if len(text) > config.max_line_length:
        raise LineTooLongError(
            f"line has {len(text)} characters, limit is {config.max_line_length}",
            line_number,
        )
    tokens = text.split()
    for token in tokens:
        if len(token) > config.max_token_length:
            raise TokenTooLongError(
                f"token {token[:20]!r}... has {len(token)} characters, "
                f"limit is {config.max_token_length}",
                line_number,
            )
    return tokens


def ingest(
    stream: Iterable[str],
    dictionary: Dictionary,
    config: Optional[IngestConfig] = None,
) -> IngestStats:
    """Read ``stream`` line by line into ``dictionary``.

    Adjacent tokens on the same line become weighted edges, unless the
    earlier one is terminal. Reading stops as soon as ``config.max_words``
    tokens have been consumed (0 means no limit).
    """
    config = config or IngestConfig()
    limit = normalize_read_cap(config.max_words)
    stats = IngestStats()

    for line_number, line in enumerate(stream, start=1):
        stats.lines = line_number
        prev: Optional[Word] = None
        for token in tokenize(line, line_number, config):
            word = dictionary.add_occurrence(token)
            stats.tokens += 1
            if prev is not None and not prev.is_terminal:
                dictionary.record_transition(prev, word)
            prev = word
            if limit and stats.tokens >= limit:
                stats.capped = True
                break
        if stats.capped:
            break

    logger.info(
        f"Read {stats.tokens} tokens from {stats.lines} lines, "
        f"{len(dictionary)} unique words"
        + (" (read cap reached)" if stats.capped else "")
    )
    return stats


def build_dictionary(
    stream: Iterable[str],
    max_words: Optional[int] = None,
    config: Optional[IngestConfig] = None,
) -> Dictionary:
    """Create a dictionary and fill it from ``stream``.

    The read cap comes either from ``max_words`` or from ``config``, not both.
    """
    if config is not None and max_words is not None:
        raise ValueError("pass max_words or config, not both")
    if config is None:
        config = IngestConfig(max_words=normalize_read_cap(max_words))
    dictionary = Dictionary()
    ingest(stream, dictionary, config)
    return dictionary
