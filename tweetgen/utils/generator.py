"""Weighted sampling and sentence generation."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, TextIO

import torch

from tweetgen.errors import EmptyDictionaryError
from tweetgen.models.dictionary import Dictionary, Word


logger = logging.getLogger(__name__)

SEED_MODULUS = 2 ** 64


def make_rng(seed: int) -> torch.Generator:
    """Create the generator every random draw of a run goes through."""
    rng = torch.Generator()
    # manual_seed only takes 64-bit values
    rng.manual_seed(seed % SEED_MODULUS)
    return rng


def draw_index(rng: torch.Generator, high: int) -> int:
    """Uniform integer in [0, high)."""
    return int(torch.randint(high, (1,), generator=rng).item())


def pick_successor(word: Word, r: int) -> Word:
    """Return the first successor whose cumulative weight covers ``r``.

    ``r`` must lie in [1, total weight]. Successors are scanned in the
    order they were first recorded.
    """
    if not 1 <= r <= word.total_weight:
        raise ValueError(
            f"r={r} outside [1, {word.total_weight}] for {word.text!r}"
        )
    for successor, weight in word.successors.items():
        if r <= weight:
            return successor
        r -= weight
    raise AssertionError("unreachable: r exceeds total weight")


class WeightedSampler:
    """Draws successors with probability proportional to edge weight."""

    def __init__(self, rng: torch.Generator):
        self.rng = rng

    def sample(self, word: Word) -> Word:
        total = word.total_weight
        if total == 0:
            raise ValueError(f"{word.text!r} has no successors to sample")
        return pick_successor(word, draw_index(self.rng, total) + 1)


@dataclass
class GeneratorConfig:
    """Configuration for sentence generation."""
    max_words: int = 20


@dataclass
class Sentence:
    index: int
    words: List[Word] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.words)

    def __str__(self) -> str:
        return f"Tweet {self.index}: " + ' '.join(w.text for w in self.words)


class SentenceGenerator:
    """Random walks over a dictionary, one sentence per call."""

    def __init__(
        self,
        dictionary: Dictionary,
        rng: torch.Generator,
        config: Optional[GeneratorConfig] = None,
    ):
        """
        Args:
            dictionary: Filled dictionary to walk over
            rng: Seeded generator shared by all draws
            config: Sentence limits (default: 20 words)
        """
        self.dictionary = dictionary
        self.rng = rng
        self.config = config or GeneratorConfig()
        self.sampler = WeightedSampler(rng)
        self.count = 0

    def first_word(self) -> Word:
        """Uniform pick over all words, redrawn until it is not terminal."""
        if not self.dictionary.start_words():
            raise EmptyDictionaryError(
                "dictionary has no word that can start a sentence"
            )
        size = len(self.dictionary)
        while True:
            word = self.dictionary.word_at(draw_index(self.rng, size))
            if not word.is_terminal:
                return word

    def generate(self) -> Sentence:
        """Generate the next sentence."""
        word = self.first_word()
        self.count += 1
        sentence = Sentence(self.count, [word])
        while len(sentence) < self.config.max_words and not word.is_terminal:
            if not word.successors:
                logger.debug(f"{word.text!r} has no successors, ending sentence")
                break
            word = self.sampler.sample(word)
            sentence.words.append(word)
        return sentence

    def write(self, out: TextIO) -> int:
        """Generate a sentence, write it as one line and return its length."""
        sentence = self.generate()
        out.write(f"{sentence}\n")
        return len(sentence)
