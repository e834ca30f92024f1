"""Word store for tweetgen."""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional


logger = logging.getLogger(__name__)

TERMINAL_MARK = '.'


@dataclass(eq=False)
class Word:
    """A unique corpus token with its successor table."""
    text: str
    count: int = 1
    # successor -> number of times it directly followed this word on a line
    successors: Dict['Word', int] = field(default_factory=dict)

    @property
    def is_terminal(self) -> bool:
        return self.text.endswith(TERMINAL_MARK)

    @property
    def total_weight(self) -> int:
        return sum(self.successors.values())

    def __repr__(self) -> str:
        return f"Word({self.text!r}, count={self.count})"


class Dictionary:
    """Unique words in first-seen order, looked up by exact string.

    Words and edges are only ever created or incremented. The whole store
    is torn down at once by :meth:`release`, either explicitly or on exit
    from a ``with`` block.
    """

    def __init__(self):
        self._words: Dict[str, Word] = {}
        # positional index for uniform picks
        self._order: List[Word] = []
        self._released = False

    def _check_alive(self) -> None:
        if self._released:
            raise RuntimeError("Dictionary has been released")

    @property
    def released(self) -> bool:
        return self._released

    def __len__(self) -> int:
        self._check_alive()
        return len(self._order)

    def __iter__(self) -> Iterator[Word]:
        self._check_alive()
        return iter(self._order)

    def __contains__(self, text: str) -> bool:
        self._check_alive()
        return text in self._words

    def lookup(self, text: str) -> Optional[Word]:
        """Return the word stored for ``text``, or None."""
        self._check_alive()
        return self._words.get(text)

    def word_at(self, index: int) -> Word:
        """Return the ``index``-th word in first-seen order."""
        self._check_alive()
        return self._order[index]

    def add_occurrence(self, text: str) -> Word:
        """Count one occurrence of ``text``, creating its word if needed."""
        self._check_alive()
        word = self._words.get(text)
        if word is None:
            word = Word(text)
            self._words[text] = word
            self._order.append(word)
        else:
            word.count += 1
        return word

    def record_transition(self, prev: Word, cur: Word) -> None:
        """Add one to the weight of the edge ``prev -> cur``."""
        self._check_alive()
        if prev.is_terminal:
            raise ValueError(f"terminal word {prev.text!r} cannot have successors")
        prev.successors[cur] = prev.successors.get(cur, 0) + 1

    def start_words(self) -> List[Word]:
        """Words that may open a sentence."""
        self._check_alive()
        return [w for w in self._order if not w.is_terminal]

    def summary(self) -> Iterator[str]:
        """Yield one readable line per word with its successor weights."""
        self._check_alive()
        for word in self._order:
            edges = ' '.join(f"{s.text}:{n}" for s, n in word.successors.items())
            yield f"{word.text} ({word.count}): {edges}".rstrip()

    def release(self) -> None:
        """Drop every word, its successor table and token, then the indexes."""
        self._check_alive()
        for word in self._order:
            word.successors.clear()
            del self._words[word.text]
            word.text = ''
        self._order.clear()
        self._words.clear()
        self._released = True
        logger.debug("Dictionary released")

    def __enter__(self) -> 'Dictionary':
        self._check_alive()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self._released:
            self.release()
