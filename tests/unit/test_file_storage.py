# -*- coding: utf-8 -*-
import io
import os

import pytest

from utils.file_storage import (
    build_stored_filename,
    file_extension,
    is_allowed_extension,
    remove_file,
    safe_join,
    sanitize_filename,
    stream_size,
    write_stream,
)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("q1 report (final).pdf", "q1_report__final_.pdf"),
        ("plain-name_v2.txt", "plain-name_v2.txt"),
        ("../../etc/passwd", ".._.._etc_passwd"),
        ("报告.docx", "__.docx"),
        ("..", "file"),
        ("", "file"),
    ],
)
def test_sanitize_filename(name, expected):
    assert sanitize_filename(name) == expected


def test_file_extension():
    assert file_extension("Report.PDF") == "pdf"
    assert file_extension("archive.tar.gz") == "gz"
    assert file_extension("README") == ""
    assert file_extension("dir.d/README") == ""


def test_is_allowed_extension():
    allowed = ("pdf", "xlsx")
    assert is_allowed_extension("plan.PDF", allowed)
    assert not is_allowed_extension("setup.exe", allowed)
    assert not is_allowed_extension("noext", allowed)


def test_build_stored_filename():
    name = build_stored_filename("my file.pdf", now=1_700_000_000.123)
    millis, nonce, rest = name.split("-", 2)
    assert millis == "1700000000123"
    assert nonce.isdigit()
    assert rest == "my_file.pdf"


def test_safe_join_rejects_escape(tmp_path):
    root = str(tmp_path)
    assert safe_join(root, "a.txt") == os.path.join(os.path.abspath(root), "a.txt")
    assert safe_join(root, "../outside.txt") is None
    assert safe_join(root, "") is None


def test_stream_size_keeps_position():
    stream = io.BytesIO(b"0123456789")
    stream.read(4)
    assert stream_size(stream) == 6
    assert stream.tell() == 4


def test_stream_size_unseekable():
    class _Pipe:
        def read(self, n=-1):
            return b""

    assert stream_size(_Pipe()) is None


def test_write_and_remove(tmp_path):
    root = str(tmp_path / "store")
    written = write_stream(root, "blob.bin", io.BytesIO(b"x" * 100_000), chunk_size=4096)
    assert written == 100_000
    assert os.path.getsize(os.path.join(root, "blob.bin")) == 100_000

    assert remove_file(root, "blob.bin") is True
    # 再删一次：文件已缺失，只返回 False
    assert remove_file(root, "blob.bin") is False
    assert remove_file(root, "../escape.txt") is False


def test_write_outside_root_refused(tmp_path):
    with pytest.raises(OSError):
        write_stream(str(tmp_path), "../escape.txt", io.BytesIO(b"x"))
