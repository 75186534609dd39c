"""Content loader that reads matched documents from the local filesystem."""
from __future__ import annotations

from pathlib import Path

from domain.errors import ContentUnavailableError
from domain.interfaces import ContentLoader


class FileContentLoader(ContentLoader):
    """Reads UTF-8 files byte-for-byte, without newline translation."""

    def __init__(self, root: str | Path | None = None) -> None:
        self._root = Path(root) if root is not None else None

    def resolve_path(self, path: str) -> Path:
        candidate = Path(path)
        if self._root is not None and not candidate.is_absolute():
            return self._root / candidate
        return candidate

    def load(self, path: str) -> str:
        target = self.resolve_path(path)
        try:
            raw = target.read_bytes()
        except OSError as exc:
            raise ContentUnavailableError(str(target), exc.strerror or str(exc)) from exc
        except ValueError as exc:
            # e.g. embedded NUL bytes in the stored path
            raise ContentUnavailableError(repr(path), str(exc)) from exc
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ContentUnavailableError(str(target), f"not valid UTF-8: {exc.reason}") from exc


__all__ = ["FileContentLoader"]
