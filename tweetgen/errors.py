"""Exceptions raised by tweetgen."""


class TweetgenError(Exception):
    """Base class for all tweetgen errors."""


class UsageError(TweetgenError):
    """Bad command-line arguments."""


class CorpusFileError(TweetgenError):
    """The corpus file could not be opened."""


class CorpusFormatError(TweetgenError, ValueError):
    """The corpus contains input the reader refuses to truncate."""

    def __init__(self, message: str, line_number: int):
        super().__init__(f"line {line_number}: {message}")
        self.line_number = line_number


class TokenTooLongError(CorpusFormatError):
    pass


class LineTooLongError(CorpusFormatError):
    pass


class EmptyDictionaryError(TweetgenError):
    """No word in the dictionary can start a sentence."""
