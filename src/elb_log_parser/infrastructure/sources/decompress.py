"""
Line source that transparently decompresses gzip input.

ALB writes its logs as .log.gz objects while Classic LB writes plain text,
and files are often renamed or piped, so compression is detected from the
leading magic bytes rather than from the file name.
"""

import gzip
import io
import zlib
from typing import IO, Iterator

from elb_log_parser.core.exceptions import (
    DecodeError,
    InputError,
    InputNotFoundError,
    PermissionDeniedError,
)
from elb_log_parser.core.models import InputDescriptor

__all__ = ["DecompressingLineSource", "GZIP_MAGIC", "sniff_gzip"]


GZIP_MAGIC = b"\x1f\x8b"


class _ReplayReader(io.RawIOBase):
    """Raw stream that serves bytes already read from a stream, then the rest of it."""

    def __init__(self, head: bytes, stream: IO[bytes]):
        self._head = head
        self._stream = stream

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        if self._head:
            data, self._head = self._head[: len(buffer)], self._head[len(buffer):]
        else:
            data = self._stream.read1(len(buffer))
        buffer[: len(data)] = data
        return len(data)


def sniff_gzip(stream: io.BufferedReader) -> tuple[IO[bytes], bool]:
    """
    Check whether a buffered binary stream starts with the gzip magic bytes.

    A peek returns whatever the first read delivered, which on a pipe can
    be a single byte. In that case the magic is read outright and replayed
    in front of the remaining data.

    Returns:
        Stream to continue reading from (positioned at the start) and
        whether it is gzip-compressed
    """
    size = len(GZIP_MAGIC)
    head = stream.peek(size)[:size]
    if len(head) < size and head:
        head = stream.read(size)
        stream = io.BufferedReader(_ReplayReader(head, stream))
    return stream, head == GZIP_MAGIC


class DecompressingLineSource:
    """
    Streaming line source over a file or standard input.

    Lines are decoded as UTF-8, invalid sequences replaced rather than
    failing the file, and yielded without their terminator. Multi-member
    gzip files (concatenated .gz objects) are read to the end.

    Example:
        source = DecompressingLineSource(InputDescriptor(Path("a.log.gz")))
        for line in source.read_lines():
            print(line)
    """

    def __init__(
        self,
        descriptor: InputDescriptor,
        encoding: str = "utf-8",
        errors: str = "replace",
    ):
        """
        Initialize the line source.

        Args:
            descriptor: Input to read
            encoding: Text encoding (default: utf-8)
            errors: How to handle encoding errors (default: replace)
        """
        self.descriptor = descriptor
        self.encoding = encoding
        self.errors = errors
        self._name: str | None = None
        self._stream: IO[bytes] | None = None
        self._compressed: bool | None = None

    @classmethod
    def from_stream(
        cls,
        stream: IO[bytes],
        name: str,
        encoding: str = "utf-8",
        errors: str = "replace",
    ) -> "DecompressingLineSource":
        """
        Build a source over an already open binary stream.

        The stream is borrowed: it is left open when reading finishes.
        """
        source = cls(InputDescriptor.stdin(), encoding=encoding, errors=errors)
        source._stream = stream
        source._name = name
        return source

    @property
    def name(self) -> str:
        return self._name or self.descriptor.name

    def read_lines(self) -> Iterator[str]:
        """
        Read lines, decompressing if needed.

        The underlying handle is held only while the generator is alive and
        is released when it is exhausted, fails, or is closed early.

        Yields:
            Log lines (without trailing newline)

        Raises:
            InputNotFoundError: If the file vanished after discovery
            PermissionDeniedError: If the file cannot be opened
            InputError: If the file cannot be opened or read for another reason
            DecodeError: If gzip data is corrupt or truncated
        """
        owned = self._stream is None and not self.descriptor.is_stdin
        stream = self._open()
        reader = stream if hasattr(stream, "peek") else io.BufferedReader(stream)
        try:
            source, self._compressed = sniff_gzip(reader)
            if self._compressed:
                yield from self._read_gzip(source)
            else:
                yield from self._read_text(source)
        except OSError as e:
            raise InputError(f"Failed to read {self.name}: {e.strerror or e}", path=self.name) from e
        finally:
            if reader is not stream:
                reader.detach()
            if owned:
                stream.close()

    def _open(self) -> IO[bytes]:
        if self._stream is not None:
            return self._stream
        try:
            return self.descriptor.open()
        except FileNotFoundError:
            raise InputNotFoundError(self.name) from None
        except PermissionError:
            raise PermissionDeniedError(self.name) from None
        except OSError as e:
            raise InputError(f"Cannot open {self.name}: {e.strerror or e}", path=self.name) from e

    def _read_gzip(self, stream: IO[bytes]) -> Iterator[str]:
        with gzip.GzipFile(fileobj=stream, mode="rb") as decompressed:
            try:
                yield from self._read_text(decompressed)
            except (gzip.BadGzipFile, EOFError, zlib.error) as e:
                raise DecodeError(self.name, str(e) or type(e).__name__) from e

    def _read_text(self, stream: IO[bytes]) -> Iterator[str]:
        text = io.TextIOWrapper(
            stream,
            encoding=self.encoding,
            errors=self.errors,
            newline="\n",
        )
        try:
            for line in text:
                yield line.rstrip("\r\n")
        finally:
            # Leave the binary stream to its owner.
            text.detach()

    def metadata(self) -> dict[str, str]:
        """Get source metadata."""
        meta = {
            "source_type": "stdin" if self.descriptor.is_stdin else "file",
            "path": self.name,
            "name": self.descriptor.path.name if self.descriptor.path else self.name,
        }
        if self._compressed is not None:
            meta["compressed"] = str(self._compressed)
        return meta
