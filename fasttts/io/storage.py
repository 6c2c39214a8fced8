"""Output file validation and persistence.

Responsibilities:
- Enforce that an output path's extension matches the requested encoding.
- Write synthesized audio bytes, creating parent directories as needed.
- Read small text inputs (config files) with consistent error mapping.
"""

from __future__ import annotations

from pathlib import Path

from ..audio.encoding import AudioEncoding, extension_for, wire_name_for
from ..errors import ExtensionMismatchError, FileIOError


def validate_extension(path: Path, encoding: AudioEncoding) -> None:
    """Require `path` to carry the extension mandated for `encoding`.

    Raises:
        ExtensionMismatchError: When the extension is missing or different.
    """

    expected = extension_for(encoding)
    suffix = path.suffix
    if not suffix:
        raise ExtensionMismatchError(
            f"output must have .{expected} extension for encoding {wire_name_for(encoding)}",
            path=path,
            expected=expected,
            actual=None,
        )
    actual = suffix[1:].lower()
    if actual != expected:
        raise ExtensionMismatchError(
            f"output extension .{actual} does not match encoding "
            f"{wire_name_for(encoding)} (expected .{expected})",
            path=path,
            expected=expected,
            actual=actual,
        )


def _ensure_parent(path: Path) -> Path:
    """Create the parent directory of `path` when it is not the current directory."""

    parent = path.parent
    if str(parent) in {"", "."}:
        return parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FileIOError(
            f"failed to create output directory: {parent} ({exc.strerror or exc})",
            path=parent,
        ) from exc
    return parent


def write_output(path: Path, data: bytes) -> Path:
    """Write audio bytes to `path`, replacing any existing file without prompting."""

    _ensure_parent(path)
    try:
        path.write_bytes(data)
    except OSError as exc:
        raise FileIOError(f"failed to write {path} ({exc.strerror or exc})", path=path) from exc
    return path


def read_text(path: Path, label: str) -> str:
    """Read a UTF-8 text file and map filesystem and decoding failures to `FileIOError`."""

    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FileIOError(f"failed to read {label}: {path} ({exc.strerror or exc})", path=path) from exc
    except UnicodeDecodeError as exc:
        raise FileIOError(f"failed to read {label}: {path} (not valid UTF-8)", path=path) from exc
