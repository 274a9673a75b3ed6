from __future__ import annotations

import bisect
import contextlib
import io
import logging
import operator
import typing as T
from pathlib import Path

from . import exceptions


LOG = logging.getLogger(__name__)


class CombinedStream(io.RawIOBase):
    """
    A read-only, seekable stream presenting the given segments as one stream
    whose bytes are the segments' bytes laid end to end.

    Segment lengths are measured once at construction and must not change
    afterwards. Seeking only moves the logical position. The segment holding
    the position is positioned on the next read.
    """

    # segments in order
    _segments: tuple[T.BinaryIO, ...]
    # length of each segment, measured at construction
    _lengths: tuple[int, ...]
    # logical offset where each segment begins
    _offsets: tuple[int, ...]
    _length: int
    _position: int
    _close_segments: bool

    def __init__(
        self, segments: T.Sequence[T.BinaryIO], close_segments: bool = False
    ) -> None:
        super().__init__()
        # close() may run from __del__ even if the validation below fails
        self._segments = ()
        self._close_segments = close_segments

        if segments is None:
            raise exceptions.StreamcatArgumentNullError("segments must not be None")

        segments = tuple(segments)
        for idx, s in enumerate(segments):
            if s is None:
                raise exceptions.StreamcatArgumentNullError(
                    f"segment {idx} must not be None"
                )
            # read and seek are all a segment needs, the file object
            # capability queries are honored when present
            readable = getattr(s, "readable", None)
            if readable is not None and not readable():
                raise ValueError(f"segment {idx} ({s}) must be readable")
            seekable = getattr(s, "seekable", None)
            if seekable is not None and not seekable():
                raise ValueError(f"segment {idx} ({s}) must be seekable")

        lengths = tuple(_measure_length(s) for s in segments)

        offsets = []
        begin_offset = 0
        for length in lengths:
            offsets.append(begin_offset)
            begin_offset += length

        self._segments = segments
        self._lengths = lengths
        self._offsets = tuple(offsets)
        self._length = begin_offset
        self._position = 0

        LOG.debug(
            "Combined %d segments into a stream of %d bytes",
            len(segments),
            self._length,
        )

    @property
    def length(self) -> int:
        return self._length

    @property
    def position(self) -> int:
        return self._position

    def segment_spans(self) -> list[tuple[int, int]]:
        """
        Return (offset, length) of every segment within the combined stream
        """
        return list(zip(self._offsets, self._lengths))

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def writable(self) -> bool:
        return False

    def readinto(self, buffer) -> int:
        self._ensure_open()

        view = memoryview(buffer).cast("B")
        requested = len(view)
        if requested == 0 or self._length <= self._position:
            return 0

        # the last segment that begins at or before the position,
        # so empty segments sharing the same offset are skipped
        idx = bisect.bisect_right(self._offsets, self._position) - 1
        rel_offset = self._position - self._offsets[idx]
        self._segments[idx].seek(rel_offset, io.SEEK_SET)

        filled = 0
        while filled < requested and idx < len(self._segments):
            remaining = self._lengths[idx] - rel_offset
            if remaining <= 0:
                idx, rel_offset = self._seek_next_segment(idx)
                continue

            wanted = min(requested - filled, remaining)
            data = self._segments[idx].read(wanted)
            if not data:
                # Return what has been read so far, the next read starts
                # at this segment again and fails there
                if filled:
                    break
                raise exceptions.StreamcatSegmentLengthError(
                    f"Segment {idx} ended at offset {rel_offset} but its length was measured as {self._lengths[idx]}"
                )

            view[filled : filled + len(data)] = data
            filled += len(data)
            rel_offset += len(data)

        self._position += filled
        return filled

    def _seek_next_segment(self, idx: int) -> tuple[int, int]:
        idx += 1
        if idx < len(self._segments):
            self._segments[idx].seek(0, io.SEEK_SET)
        return idx, 0

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        self._ensure_open()
        offset = operator.index(offset)

        if whence == io.SEEK_SET:
            new_position = offset
        elif whence == io.SEEK_CUR:
            new_position = self._position + offset
        elif whence == io.SEEK_END:
            new_position = self._length + offset
        else:
            raise ValueError(f"invalid whence ({whence}, should be 0, 1 or 2)")

        if new_position < 0:
            raise exceptions.StreamcatSeekBeforeBeginError()

        self._position = new_position
        return self._position

    def tell(self) -> int:
        self._ensure_open()
        return self._position

    def write(self, b) -> int:
        raise io.UnsupportedOperation("write")

    def truncate(self, size: int | None = None) -> int:
        raise io.UnsupportedOperation("truncate")

    def close(self) -> None:
        if self.closed:
            return
        try:
            if self._close_segments:
                for s in self._segments:
                    s.close()
        finally:
            super().close()

    def _ensure_open(self) -> None:
        if self.closed:
            raise ValueError("I/O operation on closed file.")


def _measure_length(segment: T.BinaryIO) -> int:
    tell = getattr(segment, "tell", None)
    current = tell() if tell is not None else 0
    length = segment.seek(0, io.SEEK_END)
    segment.seek(current, io.SEEK_SET)
    return length


@contextlib.contextmanager
def open_combined(
    paths: T.Iterable[Path],
) -> T.Generator[CombinedStream, None, None]:
    """
    Open the files in binary mode and yield them combined into one stream.
    All files are closed on exit.
    """
    with contextlib.ExitStack() as stack:
        segments: list[T.BinaryIO] = []
        for path in paths:
            try:
                fp = stack.enter_context(open(path, "rb"))
            except FileNotFoundError as ex:
                raise exceptions.StreamcatFileNotFoundError(
                    f"File not found: {path}"
                ) from ex
            segments.append(fp)
        with CombinedStream(segments) as stream:
            yield stream
