import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Callable, Optional, Union

from httpx import Headers

from .._utils.constants import (
    CRLF,
    DEFAULT_BUFFER_SIZE,
    HEADER_CACHE_CONTROL,
    HEADER_CONNECTION,
    HEADER_CONTENT_TYPE,
    MULTIPART_BOUNDARY,
    MULTIPART_FORM_DATA_TYPE,
    TWO_HYPHENS,
)

StreamSupplier = Callable[[], BinaryIO]
"""Zero-argument factory returning a fresh readable binary stream on each call."""

BodySource = Union[str, bytes, Path, StreamSupplier]


class BodyKind(str, Enum):
    STRING = "string"
    BYTES = "bytes"
    FILE = "file"
    STREAM = "stream"
    MULTIPART_FILE = "multipart_file"
    MULTIPART_BYTES = "multipart_bytes"
    MULTIPART_STREAM = "multipart_stream"


_MULTIPART_KINDS = frozenset(
    {BodyKind.MULTIPART_FILE, BodyKind.MULTIPART_BYTES, BodyKind.MULTIPART_STREAM}
)


@dataclass(frozen=True)
class BodyProcessor:
    """Writes one request payload onto an output sink.

    A processor owns a single payload source: text, bytes, a file path or a
    stream supplier. The ``kind`` tag selects how the source is serialized.
    Multipart kinds wrap the payload in a single-part ``multipart/form-data``
    envelope and contribute the matching transport headers.

    Instances are built through the factories in
    :mod:`restline.request.body_processors`.
    """

    kind: BodyKind
    source: BodySource
    name: Optional[str] = None
    key: Optional[str] = None
    buffer_size: int = DEFAULT_BUFFER_SIZE

    @property
    def is_multipart(self) -> bool:
        return self.kind in _MULTIPART_KINDS

    def write_content(self, sink: BinaryIO) -> None:
        """Write the whole payload to ``sink``.

        Files and streams opened here are closed before this method returns
        or raises. The sink is left open.

        Args:
            sink: Writable binary stream receiving the payload.

        Raises:
            OSError: If the file or stream backing the payload cannot be read.
        """
        if self.is_multipart:
            self._write_multipart(sink)
        else:
            self._write_payload(sink)

    def prepare_transport(self, headers: Headers) -> None:
        """Set the transport headers this payload needs before it is written."""
        if not self.is_multipart:
            return

        headers[HEADER_CONNECTION] = "Keep-Alive"
        headers[HEADER_CACHE_CONTROL] = "no-cache"
        headers[HEADER_CONTENT_TYPE] = (
            f"{MULTIPART_FORM_DATA_TYPE};boundary={MULTIPART_BOUNDARY}"
        )

    def _write_payload(self, sink: BinaryIO) -> None:
        if self.kind is BodyKind.STRING:
            sink.write(self.source.encode("utf-8"))  # type: ignore[union-attr]
            sink.flush()
        elif self.kind in (BodyKind.BYTES, BodyKind.MULTIPART_BYTES):
            sink.write(self.source)  # type: ignore[arg-type]
        else:
            with self._open_stream() as stream:
                shutil.copyfileobj(stream, sink, self.buffer_size)

    def _write_multipart(self, sink: BinaryIO) -> None:
        sink.write(f"{TWO_HYPHENS}{MULTIPART_BOUNDARY}{CRLF}".encode("utf-8"))
        sink.write(
            (
                f'Content-Disposition: form-data; name="{self.key}";'
                f'filename="{self.name}"{CRLF}'
            ).encode("utf-8")
        )
        sink.write(CRLF.encode("utf-8"))
        self._write_payload(sink)
        sink.write(CRLF.encode("utf-8"))
        sink.write(
            f"{TWO_HYPHENS}{MULTIPART_BOUNDARY}{TWO_HYPHENS}{CRLF}".encode("utf-8")
        )
        sink.flush()

    def _open_stream(self) -> BinaryIO:
        if self.kind in (BodyKind.FILE, BodyKind.MULTIPART_FILE):
            return open(self.source, "rb")  # type: ignore[arg-type]
        # a consumed stream cannot be replayed, ask for a new one every time
        return self.source()  # type: ignore[operator]
