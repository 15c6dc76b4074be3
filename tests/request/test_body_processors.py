import builtins
from io import BytesIO
from pathlib import Path

import pytest
from httpx import Headers

from restline import BodyKind, body_processors
from restline.request import _body


def multipart(key: str, name: str, payload: bytes) -> bytes:
    return (
        b"--*****\r\n"
        + f'Content-Disposition: form-data; name="{key}";filename="{name}"\r\n'.encode()
        + b"\r\n"
        + payload
        + b"\r\n"
        + b"--*****--\r\n"
    )


class TrackingStream(BytesIO):
    def __init__(self, data: bytes) -> None:
        super().__init__(data)
        self.was_closed = False

    def close(self) -> None:
        self.was_closed = True
        super().close()


class CountingSupplier:
    def __init__(self, data: bytes) -> None:
        self.data = data
        self.streams: list[TrackingStream] = []

    def __call__(self) -> TrackingStream:
        stream = TrackingStream(self.data)
        self.streams.append(stream)
        return stream


@pytest.fixture
def sink() -> BytesIO:
    return BytesIO()


@pytest.fixture
def temp_file(tmp_path: Path) -> Path:
    file_path = tmp_path / "report.bin"
    file_path.write_bytes(bytes(range(256)) * 100)
    return file_path


class TestBodyProcessors:
    class TestWriteContent:
        def test_string(self, sink: BytesIO):
            body_processors.string("héllo wörld").write_content(sink)

            assert sink.getvalue() == "héllo wörld".encode("utf-8")

        def test_bytes(self, sink: BytesIO):
            data = b"\x00\x01binary\xff"

            body_processors.bytes(data).write_content(sink)

            assert sink.getvalue() == data

        def test_file(self, sink: BytesIO, temp_file: Path):
            body_processors.file(temp_file).write_content(sink)

            assert sink.getvalue() == temp_file.read_bytes()

        def test_file_accepts_str_path(self, sink: BytesIO, temp_file: Path):
            body_processors.file(str(temp_file)).write_content(sink)

            assert sink.getvalue() == temp_file.read_bytes()

        def test_missing_file_raises(self, sink: BytesIO, tmp_path: Path):
            processor = body_processors.file(tmp_path / "missing.txt")

            with pytest.raises(FileNotFoundError):
                processor.write_content(sink)

        def test_stream_is_closed(self, sink: BytesIO):
            supplier = CountingSupplier(b"streamed content")

            body_processors.stream(supplier).write_content(sink)

            assert sink.getvalue() == b"streamed content"
            assert supplier.streams[0].was_closed

        def test_stream_supplier_called_on_every_write(self):
            supplier = CountingSupplier(b"streamed content")
            processor = body_processors.stream(supplier)

            first, second = BytesIO(), BytesIO()
            processor.write_content(first)
            processor.write_content(second)

            assert len(supplier.streams) == 2
            assert supplier.streams[0] is not supplier.streams[1]
            assert first.getvalue() == second.getvalue() == b"streamed content"

        def test_stream_closed_when_sink_fails(self):
            supplier = CountingSupplier(b"streamed content")

            class BrokenSink(BytesIO):
                def write(self, data):
                    raise OSError("connection reset")

            with pytest.raises(OSError, match="connection reset"):
                body_processors.stream(supplier).write_content(BrokenSink())

            assert supplier.streams[0].was_closed

        @pytest.mark.parametrize(
            "factory", [body_processors.file, body_processors.multipart_file]
        )
        def test_file_closed_when_sink_fails(
            self, temp_file: Path, monkeypatch: pytest.MonkeyPatch, factory
        ):
            opened = []

            def tracking_open(*args, **kwargs):
                handle = builtins.open(*args, **kwargs)
                opened.append(handle)
                return handle

            monkeypatch.setattr(_body, "open", tracking_open, raising=False)

            class BrokenSink(BytesIO):
                def write(self, data):
                    # envelope lines go through, file chunks do not
                    if len(data) > 100:
                        raise OSError("connection reset")
                    return super().write(data)

            with pytest.raises(OSError, match="connection reset"):
                factory(temp_file).write_content(BrokenSink())

            assert len(opened) == 1
            assert all(handle.closed for handle in opened)

        def test_sink_is_left_open(self, sink: BytesIO):
            body_processors.string("content").write_content(sink)

            assert not sink.closed

    class TestMultipart:
        def test_multipart_file(self, sink: BytesIO, temp_file: Path):
            body_processors.multipart_file(temp_file).write_content(sink)

            assert sink.getvalue() == multipart(
                "report.bin", "report.bin", temp_file.read_bytes()
            )

        def test_multipart_file_with_key(self, sink: BytesIO, temp_file: Path):
            processor = body_processors.multipart_file(
                temp_file, key="attachment", buffer_size=16
            )

            processor.write_content(sink)

            assert processor.buffer_size == 16
            assert sink.getvalue() == multipart(
                "attachment", "report.bin", temp_file.read_bytes()
            )

        def test_multipart_bytes(self, sink: BytesIO):
            body_processors.multipart_bytes(b"a,b\n1,2\n", "data.csv").write_content(
                sink
            )

            assert sink.getvalue() == (
                b"--*****\r\n"
                b'Content-Disposition: form-data; name="data.csv";filename="data.csv"\r\n'
                b"\r\n"
                b"a,b\n1,2\n"
                b"\r\n"
                b"--*****--\r\n"
            )

        def test_multipart_bytes_with_key(self, sink: BytesIO):
            body_processors.multipart_bytes(
                b"payload", "data.csv", key="upload"
            ).write_content(sink)

            assert sink.getvalue() == multipart("upload", "data.csv", b"payload")

        def test_multipart_stream(self, sink: BytesIO):
            supplier = CountingSupplier(b"streamed content")

            body_processors.multipart_stream(
                supplier, "log.txt", key="logs"
            ).write_content(sink)

            assert sink.getvalue() == multipart("logs", "log.txt", b"streamed content")
            assert supplier.streams[0].was_closed

        def test_multipart_stream_key_defaults_to_name(self):
            processor = body_processors.multipart_stream(
                CountingSupplier(b""), "log.txt"
            )

            assert processor.key == "log.txt"
            assert processor.name == "log.txt"

        def test_prepare_transport_sets_multipart_headers(self):
            headers = Headers({"Content-Type": "application/json"})

            body_processors.multipart_bytes(b"x", "x.bin").prepare_transport(headers)

            assert headers["Connection"] == "Keep-Alive"
            assert headers["Cache-Control"] == "no-cache"
            assert headers["Content-Type"] == "multipart/form-data;boundary=*****"

    class TestPrepareTransport:
        @pytest.mark.parametrize(
            "processor",
            [
                body_processors.string("x"),
                body_processors.bytes(b"x"),
                body_processors.file("x.txt"),
                body_processors.stream(lambda: BytesIO(b"x")),
            ],
        )
        def test_plain_processors_leave_headers_untouched(self, processor):
            headers = Headers({"Content-Type": "text/plain"})

            processor.prepare_transport(headers)

            assert dict(headers) == {"content-type": "text/plain"}

    class TestKinds:
        def test_factories_tag_kinds(self, temp_file: Path):
            supplier = CountingSupplier(b"")

            assert body_processors.string("x").kind is BodyKind.STRING
            assert body_processors.bytes(b"x").kind is BodyKind.BYTES
            assert body_processors.file(temp_file).kind is BodyKind.FILE
            assert body_processors.stream(supplier).kind is BodyKind.STREAM
            assert (
                body_processors.multipart_file(temp_file).kind
                is BodyKind.MULTIPART_FILE
            )
            assert (
                body_processors.multipart_bytes(b"x", "x").kind
                is BodyKind.MULTIPART_BYTES
            )
            assert (
                body_processors.multipart_stream(supplier, "x").kind
                is BodyKind.MULTIPART_STREAM
            )
            assert not body_processors.stream(supplier).is_multipart
            assert body_processors.multipart_stream(supplier, "x").is_multipart
