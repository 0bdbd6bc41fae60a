"""Tests for transport sinks."""

import pytest

from envelope_transport.sinks import ConsoleSink, DummySink, FileSink, TransportSink, create_sink


class TestDummySink:
    def test_records(self):
        sink = DummySink()
        sink.send(b"one")
        sink.send(b"two")

        assert sink.payloads == [b"one", b"two"]
        assert sink.last_payload == b"two"

    def test_empty(self):
        assert DummySink().last_payload is None


class TestConsoleSink:
    def test_stdout(self, capsys):
        ConsoleSink().send(b'{"a":1}')

        assert capsys.readouterr().out == '[ENVELOPE] {"a":1}\n'

    def test_stderr(self, capsys):
        ConsoleSink(stream="stderr", prefix="").send(b"x")

        assert capsys.readouterr().err == "x\n"


class TestFileSink:
    def test_appends(self, tmp_path):
        path = tmp_path / "out" / "envelopes.log"
        sink = FileSink(path=str(path))

        sink.send(b"first\nenvelope")
        sink.send(b"second")
        sink.stop()

        assert path.read_text() == "first\nenvelope\n\nsecond\n\n"


class TestCreateSink:
    def test_types(self, tmp_path):
        assert isinstance(create_sink("dummy"), DummySink)
        assert isinstance(create_sink("console", {"stream": "stderr"}), ConsoleSink)
        assert isinstance(create_sink("file", {"path": str(tmp_path / "f")}), FileSink)

    def test_unknown(self):
        with pytest.raises(ValueError):
            create_sink("carrier-pigeon")

    def test_base_is_abstract(self):
        with pytest.raises(TypeError):
            TransportSink()
