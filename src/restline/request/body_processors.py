"""Factories for the supported :class:`BodyProcessor` variants.

Examples:
    >>> from restline import body_processors
    >>> body_processors.string('{"name": "ada"}')
    >>> body_processors.multipart_file("report.pdf", key="attachment")
"""

import builtins
import os
from pathlib import Path
from typing import Optional, Union

from .._utils.constants import DEFAULT_BUFFER_SIZE
from ._body import BodyKind, BodyProcessor, StreamSupplier

PathLike = Union[str, os.PathLike]


def string(content: str) -> BodyProcessor:
    """Send ``content`` encoded as UTF-8."""
    return BodyProcessor(kind=BodyKind.STRING, source=content)


def bytes(data: builtins.bytes) -> BodyProcessor:
    """Send ``data`` verbatim."""
    return BodyProcessor(kind=BodyKind.BYTES, source=data)


def file(path: PathLike) -> BodyProcessor:
    """Send the raw content of the file at ``path``."""
    return BodyProcessor(kind=BodyKind.FILE, source=Path(path))


def stream(supplier: StreamSupplier) -> BodyProcessor:
    """Send the content of a stream obtained from ``supplier``.

    The supplier is called on every write, so the same processor can be sent
    again (e.g. on retry) without replaying an exhausted stream.
    """
    return BodyProcessor(kind=BodyKind.STREAM, source=supplier)


def multipart_file(
    path: PathLike,
    key: Optional[str] = None,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> BodyProcessor:
    """Upload a file as ``multipart/form-data``.

    Args:
        path: File to upload. Its name is used as the part filename.
        key: Form field name. Defaults to the file name.
        buffer_size: Chunk size used when copying the file.
    """
    path = Path(path)
    return BodyProcessor(
        kind=BodyKind.MULTIPART_FILE,
        source=path,
        name=path.name,
        key=key if key is not None else path.name,
        buffer_size=buffer_size,
    )


def multipart_bytes(
    data: builtins.bytes,
    name: str,
    key: Optional[str] = None,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> BodyProcessor:
    """Upload in-memory bytes as a ``multipart/form-data`` file named ``name``."""
    return BodyProcessor(
        kind=BodyKind.MULTIPART_BYTES,
        source=data,
        name=name,
        key=key if key is not None else name,
        buffer_size=buffer_size,
    )


def multipart_stream(
    supplier: StreamSupplier,
    name: str,
    key: Optional[str] = None,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> BodyProcessor:
    """Upload a supplied stream as a ``multipart/form-data`` file named ``name``."""
    return BodyProcessor(
        kind=BodyKind.MULTIPART_STREAM,
        source=supplier,
        name=name,
        key=key if key is not None else name,
        buffer_size=buffer_size,
    )
