from __future__ import annotations

"""
Integration tests for the input opening layer.

Verifies gzip detection, ownership of opened handles and rejection of
inputs that cannot be read as text lines.
"""

import gzip
import io

import pytest

from linestream.domain.errors import InputOpenError
from linestream.infra.opener import is_gzip_path, open_input


def test_plain_path_is_owned(numbers_path) -> None:
    opened = open_input(numbers_path)
    try:
        assert opened.owned is True
        assert opened.name == numbers_path
        assert next(iter(opened.stream)) == "One\n"
    finally:
        opened.close()
    assert opened.stream.closed


def test_gzip_detected_from_suffix(numbers_gz) -> None:
    opened = open_input(numbers_gz)
    try:
        assert list(opened.stream)[:2] == ["One\n", "Two\n"]
    finally:
        opened.close()


def test_gzip_suffix_can_be_overridden(tmp_path) -> None:
    plain = tmp_path / "not_really.gz"
    plain.write_text("hello\n", encoding="utf-8")
    opened = open_input(plain, gzip=False)
    try:
        assert list(opened.stream) == ["hello\n"]
    finally:
        opened.close()


def test_forced_gzip_without_suffix(tmp_path) -> None:
    target = tmp_path / "compressed.dat"
    with gzip.open(target, "wt", encoding="utf-8") as f:
        f.write("a\nb\n")
    opened = open_input(str(target), gzip=True)
    try:
        assert list(opened.stream) == ["a\n", "b\n"]
    finally:
        opened.close()


def test_binary_stream_is_decoded_and_left_open() -> None:
    raw = io.BytesIO("café\nbar\n".encode("utf-8"))
    opened = open_input(raw)
    assert list(opened.stream) == ["café\n", "bar\n"]
    opened.close()
    assert not raw.closed


def test_gzip_binary_stream() -> None:
    raw = io.BytesIO(gzip.compress(b"x\ny\n"))
    opened = open_input(raw, gzip=True)
    assert list(opened.stream) == ["x\n", "y\n"]
    opened.close()
    assert not raw.closed


def test_text_stream_passes_through() -> None:
    stream = io.StringIO("a\n")
    opened = open_input(stream)
    assert opened.stream is stream
    assert opened.owned is False
    opened.close()
    assert not stream.closed


def test_iterable_of_strings_passes_through() -> None:
    lines = ["a", "b"]
    opened = open_input(lines)
    assert opened.stream is lines
    assert opened.name == "<list>"


def test_gzip_rejected_for_plain_iterables() -> None:
    with pytest.raises(InputOpenError):
        open_input(["a"], gzip=True)


@pytest.mark.parametrize("bad", [42, b"raw bytes"])
def test_unsupported_inputs(bad) -> None:
    with pytest.raises(InputOpenError):
        open_input(bad)


def test_decode_errors_policy(tmp_path) -> None:
    target = tmp_path / "broken.txt"
    target.write_bytes(b"ok\n\xff\xfe\n")
    opened = open_input(str(target), errors="replace")
    try:
        assert "�" in list(opened.stream)[1]
    finally:
        opened.close()


@pytest.mark.parametrize("name, expected", [
    ("a.gz", True),
    ("A.GZ", True),
    ("a.gzip", True),
    ("a.txt", False),
    ("gz", False),
])
def test_is_gzip_path(name: str, expected: bool) -> None:
    assert is_gzip_path(name) is expected
