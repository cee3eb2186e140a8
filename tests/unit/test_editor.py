"""
Unit tests for the editor surfaces.
"""
from __future__ import annotations

import asyncio

from autolink.inventory.provider import StaticInventoryProvider
from autolink.session.editor import FileSurface, NoEditableSurfaceError, TextBufferSurface
from autolink.session.session import AutoLinkSession


class TestTextBufferSurface:
    def test_read_write(self):
        surface = TextBufferSurface("Paris")
        surface.write("[[Paris]]")
        assert surface.read() == "[[Paris]]"

    def test_default_empty(self):
        assert TextBufferSurface().read() == ""

    def test_listeners_called_in_order(self):
        surface = TextBufferSurface()
        seen = []
        surface.subscribe(lambda text: seen.append(("a", text)))
        surface.subscribe(lambda text: seen.append(("b", text)))

        surface.write("Lyon")
        assert seen == [("a", "Lyon"), ("b", "Lyon")]


class TestFileSurface:
    def test_in_place(self, tmp_path):
        path = tmp_path / "page.wiki"
        path.write_text("Lyon", encoding="utf-8")
        surface = FileSurface(path)

        surface.write("[[Lyon]]")
        assert path.read_text(encoding="utf-8") == "[[Lyon]]"

    def test_separate_output(self, tmp_path):
        source = tmp_path / "page.wiki"
        target = tmp_path / "page.linked.wiki"
        source.write_text("Lyon", encoding="utf-8")
        surface = FileSurface(source, output_path=target)

        surface.write("[[Lyon]]")
        assert source.read_text(encoding="utf-8") == "Lyon"
        assert target.read_text(encoding="utf-8") == "[[Lyon]]"

    def test_crlf_preserved(self, tmp_path):
        path = tmp_path / "page.wiki"
        path.write_bytes(b"Paris\r\nLyon\r\n")
        surface = FileSurface(path)

        assert surface.read() == "Paris\r\nLyon\r\n"
        surface.write(surface.read())
        assert path.read_bytes() == b"Paris\r\nLyon\r\n"

    def test_session_undo_restores_file_bytes(self, tmp_path):
        path = tmp_path / "page.wiki"
        original = "Paris\r\n{{Lyon}}\r\nZürich\r\n".encode("utf-8")
        path.write_bytes(original)
        session = AutoLinkSession(
            surface=FileSurface(path),
            provider=StaticInventoryProvider(["Paris", "Lyon", "Zürich"]),
        )

        asyncio.run(session.auto_link())
        assert path.read_bytes() == "[[Paris]]\r\n{{Lyon}}\r\n[[Zürich]]\r\n".encode("utf-8")

        session.undo()
        assert path.read_bytes() == original


class TestNoEditableSurfaceError:
    def test_message(self):
        assert str(NoEditableSurfaceError()) == "No editable text surface attached"

    def test_is_runtime_error(self):
        assert isinstance(NoEditableSurfaceError(), RuntimeError)
