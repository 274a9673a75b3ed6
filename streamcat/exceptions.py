from __future__ import annotations


class StreamcatUserError(Exception):
    exit_code: int


class StreamcatBadParameterError(StreamcatUserError):
    exit_code = 2


class StreamcatFileNotFoundError(StreamcatUserError):
    exit_code = 3


class StreamcatInvalidConfigError(StreamcatUserError):
    exit_code = 4


class StreamcatArgumentNullError(StreamcatUserError, TypeError):
    """
    Raised when the segment sequence, or one of its elements, is None
    """

    exit_code = 5


class StreamcatSeekBeforeBeginError(StreamcatUserError, OSError):
    exit_code = 6

    MESSAGE = (
        "An attempt was made to move the position before the beginning of the stream."
    )

    def __init__(self, message: str | None = None) -> None:
        super().__init__(self.MESSAGE if message is None else message)


class StreamcatSegmentLengthError(StreamcatUserError, OSError):
    """
    Raised when a segment ends before the length measured at construction
    """

    exit_code = 7
