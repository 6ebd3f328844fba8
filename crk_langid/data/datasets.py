import sys
from pathlib import Path


def ensure_exists(path: Path) -> None:
    path = Path(path)
    if path.is_file():
        return
    if path.is_dir():
        raise IsADirectoryError(f"Not a file: {path}")
    if path.exists():
        raise OSError(f"Not a file: {path}")
    raise FileNotFoundError(f"Missing file: {path}")


def iter_lines(path):
    """Lines of a UTF-8 word list, lazily and in file order.

    Decoding is strict: a malformed line raises UnicodeDecodeError and stops
    the caller, there is no skipping.
    """
    path = Path(path)
    ensure_exists(path)
    return _read_lines(path)


def _read_lines(path: Path):
    with path.open(encoding="utf-8") as f:
        for ln in f:
            yield ln


def load_words(path):
    """Non-empty, stripped lines of a word list."""
    return [ln.strip() for ln in iter_lines(path) if ln.strip()]


def iter_queries(path=None):
    """Query lines from a file, or from stdin when path is None."""
    if path is None:
        return sys.stdin
    return iter_lines(path)
