"""Loader chain model.

A loader exposes a list of URLs it searches and an optional parent it
delegates to. Discovery walks from the calling thread's context loader up
through the parents, so host applications register their own loaders here
in the same way they would install an import hook.
"""

import contextlib
import logging
import sys
import threading
from abc import ABC
from abc import abstractmethod
from collections.abc import Iterable
from collections.abc import Iterator
from pathlib import Path
from urllib.parse import urlsplit
from urllib.request import url2pathname

logger = logging.getLogger(__name__)

_context = threading.local()


class UrlLoader(ABC):
    """Loader whose search path is visible as a list of URLs."""

    @abstractmethod
    def get_urls(self) -> list[str]:
        """Return the URLs this loader searches, in search order."""

    @abstractmethod
    def get_parent(self) -> object | None:
        """Return the parent loader, or None at the top of the chain.

        Raises:
            PermissionError: The parent is not visible to the caller
        """


class PathListLoader(UrlLoader):
    """Loader over a fixed list of filesystem paths."""

    def __init__(self, paths: Iterable[str | Path], parent: object | None = None):
        self.paths = [Path(p) for p in paths]
        self.parent = parent

    @classmethod
    def from_sys_path(cls) -> "PathListLoader":
        """Build a loader over the interpreter's import path.

        An empty entry in sys.path stands for the current directory.
        """
        return cls(entry or "." for entry in sys.path if isinstance(entry, str))

    def get_urls(self) -> list[str]:
        return [p.absolute().as_uri() for p in self.paths]

    def get_parent(self) -> object | None:
        return self.parent

    def __repr__(self) -> str:
        return f"PathListLoader({len(self.paths)} paths)"


def normalize_path(path: str | Path) -> str:
    """Normalize a path for the host OS.

    Repeated and trailing separators and "." segments are collapsed; ".."
    segments are kept since resolving them would need the filesystem.
    """
    return str(Path(path))


def url_to_path(url: str) -> str:
    """Convert a URL to a normalized host path using only its path part."""
    return normalize_path(url2pathname(urlsplit(url).path))


def get_context_loader() -> object | None:
    """Return the context loader of the calling thread.

    Threads that never set one get a fresh loader over sys.path.
    """
    loader = getattr(_context, "loader", None)
    if loader is None:
        return PathListLoader.from_sys_path()
    return loader


def set_context_loader(loader: object | None) -> None:
    """Set the context loader of the calling thread (None restores the default)."""
    _context.loader = loader


@contextlib.contextmanager
def context_loader(loader: object | None) -> Iterator[object | None]:
    """Temporarily install a context loader for the calling thread."""
    previous = getattr(_context, "loader", None)
    set_context_loader(loader)
    try:
        yield loader
    finally:
        set_context_loader(previous)


def iter_loader_chain(loader: object | None) -> Iterator[UrlLoader]:
    """Yield the loader and its ancestors while they expose URLs.

    The walk stops at the first missing or non-URL loader, or when the
    parent cannot be read.
    """
    while loader is not None and isinstance(loader, UrlLoader):
        yield loader
        try:
            loader = loader.get_parent()
        except PermissionError:
            logger.debug(f"[loaders] parent of {loader!r} not accessible, stopping walk")
            loader = None
