"""Command-line interface for tweet generation."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from tweetgen.data.corpus import IngestConfig, build_dictionary, normalize_read_cap
from tweetgen.errors import (
    CorpusFileError,
    CorpusFormatError,
    EmptyDictionaryError,
    UsageError,
)
from tweetgen.utils.generator import GeneratorConfig, SentenceGenerator, make_rng


logger = logging.getLogger(__name__)

USAGE_MSG = "Usage: <seed><tweets><path><optional: number of words>"
FILE_MSG = "Error: file path is invalid"
ALLOC_MSG = "Allocation failure: memory allocation was failed"

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def setup_logging(level=logging.WARNING):
    """Configure logging."""
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


class ArgumentParser(argparse.ArgumentParser):
    """Parser that reports bad arguments as a UsageError."""

    def error(self, message):
        raise UsageError(message)


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog='tweetgen',
        description='Generate random sentences from a word-adjacency model',
        add_help=False,
    )
    parser.add_argument('seed', type=int, help='Random seed')
    parser.add_argument('tweets', type=int, help='Number of sentences to print')
    parser.add_argument('path', type=Path, help='Corpus text file')
    parser.add_argument(
        'max_words',
        type=int,
        nargs='?',
        default=0,
        help='Number of words to read (0 or -1: whole file)'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='count',
        default=0,
        help='Log progress (-v) or dump the dictionary (-vv) to stderr'
    )
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    args = build_parser().parse_args(argv)
    try:
        args.max_words = normalize_read_cap(args.max_words)
    except ValueError as e:
        raise UsageError(str(e)) from e
    return args


def run(args: argparse.Namespace) -> None:
    """Build the dictionary from the corpus and print the tweets."""
    # seeded before anything else draws
    rng = make_rng(args.seed)
    config = IngestConfig(max_words=args.max_words)

    try:
        corpus = open(args.path, 'r', encoding='utf-8', errors='replace')
    except OSError as e:
        raise CorpusFileError(f"{args.path}: {e}") from e

    with corpus:
        dictionary = build_dictionary(corpus, config=config)

    with dictionary:
        if logger.isEnabledFor(logging.DEBUG):
            for line in dictionary.summary():
                logger.debug(line)
        generator = SentenceGenerator(dictionary, rng, GeneratorConfig())
        for _ in range(args.tweets):
            generator.write(sys.stdout)
    logger.info(f"Generated {generator.count} tweets")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    try:
        args = parse_args(argv)
    except UsageError as e:
        print(USAGE_MSG)
        logger.debug(f"Bad arguments: {e}")
        return EXIT_FAILURE

    setup_logging({0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG))

    try:
        run(args)
    except CorpusFileError as e:
        logger.info(f"Cannot open corpus: {e}")
        print(FILE_MSG)
        return EXIT_FAILURE
    except (CorpusFormatError, EmptyDictionaryError) as e:
        print(f"Error: {e}")
        return EXIT_FAILURE
    except MemoryError:
        print(ALLOC_MSG)
        return EXIT_FAILURE

    return EXIT_SUCCESS


if __name__ == '__main__':
    sys.exit(main())
