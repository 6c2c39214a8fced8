"""Unit tests for output extension validation and audio persistence."""

from __future__ import annotations

from pathlib import Path

import pytest

from fasttts.audio.encoding import AudioEncoding
from fasttts.errors import ExtensionMismatchError, FileIOError
from fasttts.io.storage import read_text, validate_extension, write_output


@pytest.mark.parametrize(
    ("name", "encoding"),
    [
        ("speech.wav", AudioEncoding.LINEAR16),
        ("speech.WAV", AudioEncoding.LINEAR16),
        ("speech.Mp3", AudioEncoding.MP3),
        ("speech.ogg", AudioEncoding.OGG_OPUS),
        ("phone.wav", AudioEncoding.MULAW),
        ("phone.wav", AudioEncoding.ALAW),
    ],
)
def test_validate_extension_accepts_matching_suffix(name: str, encoding: AudioEncoding) -> None:
    """Matching extensions should pass with case-insensitive comparison."""

    validate_extension(Path(name), encoding)


def test_validate_extension_names_both_extensions_on_mismatch() -> None:
    """A mismatched extension should name the supplied and expected extensions."""

    with pytest.raises(ExtensionMismatchError) as exc_info:
        validate_extension(Path("out/speech.mp3"), AudioEncoding.LINEAR16)

    error = exc_info.value
    assert error.detail == "output extension .mp3 does not match encoding LINEAR16 (expected .wav)"
    assert error.actual == "mp3"
    assert error.expected == "wav"


def test_validate_extension_reports_missing_extension_separately() -> None:
    """A path without an extension should produce the missing-extension message."""

    with pytest.raises(ExtensionMismatchError) as exc_info:
        validate_extension(Path("speech"), AudioEncoding.OGG_OPUS)

    assert exc_info.value.detail == "output must have .ogg extension for encoding OGG_OPUS"
    assert exc_info.value.actual is None


def test_write_output_creates_parent_directories(tmp_path: Path) -> None:
    """Writing should create nested parents and store the exact bytes."""

    target = tmp_path / "nested" / "dir" / "speech.wav"

    written = write_output(target, b"WAVDATA")

    assert written == target
    assert target.read_bytes() == b"WAVDATA"


def test_write_output_overwrites_existing_file(tmp_path: Path) -> None:
    """Existing output files should be replaced without prompting."""

    target = tmp_path / "speech.mp3"
    target.write_bytes(b"old audio payload")

    write_output(target, b"new")

    assert target.read_bytes() == b"new"


def test_write_output_maps_directory_failures_to_file_io_error(tmp_path: Path) -> None:
    """A parent path that is a regular file should fail with `FileIOError`."""

    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x", encoding="utf-8")

    with pytest.raises(FileIOError, match="failed to create output directory"):
        write_output(blocker / "speech.wav", b"data")


def test_read_text_reports_missing_file(tmp_path: Path) -> None:
    """Reading a missing file should name the label and path."""

    missing = tmp_path / "missing.yaml"

    with pytest.raises(FileIOError, match="failed to read config") as exc_info:
        read_text(missing, "config")

    assert exc_info.value.path == missing
