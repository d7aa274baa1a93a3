"""Resource list sources.

Concrete implementations of ResourceListSource:
- AggregateResourceListSource: Concatenates other sources in order
- DirectoryResourceListSource: Files under classpath directories
- ArchiveResourceListSource: Entries inside classpath archives
- StandardResourceListSource: Directories first, then archives
"""

import logging
import os
import zipfile
from abc import ABC
from abc import abstractmethod
from collections.abc import Iterable
from pathlib import Path
from pathlib import PurePosixPath

from .classpath import get_classpath_archives
from .classpath import get_classpath_directories
from .criteria import ResourceCriteria
from .environment import DiscoveryEnvironment
from .errors import InvalidSourceListError

logger = logging.getLogger(__name__)


def _normalize_base_path(base_path: str) -> str | None:
    """Turn base_path into a "/"-separated prefix relative to a classpath root.

    Leading and trailing slashes are dropped and "." means the whole root.

    Returns:
        The prefix ("" for the whole root), or None if it has ".." segments,
        which could climb out of the root
    """
    if not base_path:
        return ""
    prefix = PurePosixPath(base_path.replace(os.sep, "/")).as_posix().strip("/")
    if prefix == ".":
        return ""
    if ".." in prefix.split("/"):
        return None
    return prefix


class ResourceListSource(ABC):
    """Lists the names of resources under a base path."""

    @abstractmethod
    def get_resources(self, base_path: str, criteria: ResourceCriteria) -> list[str]:
        """Return the names of resources under base_path that match criteria.

        Args:
            base_path: Path prefix to search below ("" for everything)
            criteria: Predicate each resource name must satisfy

        Returns:
            Matching resource names; empty if there are none
        """


class AggregateResourceListSource(ResourceListSource):
    """Combines several sources into one.

    Results are concatenated in registration order. Names returned by more
    than one source appear more than once.
    """

    def __init__(self, sources: Iterable[ResourceListSource] | None = ()):
        """Initialize with the sources to aggregate.

        Args:
            sources: Sources to aggregate (default: none)

        Raises:
            InvalidSourceListError: sources is None
        """
        if sources is None:
            raise InvalidSourceListError("ResourceListSources list cannot be None")
        self.sources: list[ResourceListSource] = list(sources)

    @classmethod
    def of(cls, *sources: ResourceListSource) -> "AggregateResourceListSource":
        """Build an aggregate from sources given as arguments."""
        return cls(sources)

    def get_resources(self, base_path: str, criteria: ResourceCriteria) -> list[str]:
        resource_names = []
        for source in self.sources:
            resource_names.extend(source.get_resources(base_path, criteria))
        return resource_names

    def add_resource_list_source(self, source: ResourceListSource) -> None:
        """Append a source; it is consulted after the existing ones."""
        self.sources.append(source)

    def __repr__(self) -> str:
        return f"AggregateResourceListSource({self.sources!r})"


class DirectoryResourceListSource(ResourceListSource):
    """Lists files below base_path in each classpath directory.

    Names are relative to the directory they were found in and always use
    "/" as separator, e.g. "config/plugins/db.xml".
    """

    def __init__(
        self,
        directories: Iterable[str | Path] | None = None,
        environment: DiscoveryEnvironment | None = None,
    ):
        """Initialize with the directories to search.

        Args:
            directories: Fixed directories to search. If None, the classpath
                directories are discovered on every call.
            environment: Process view used for discovery (default: live process)
        """
        self.directories = None if directories is None else [Path(d) for d in directories]
        self.environment = environment

    def get_resources(self, base_path: str, criteria: ResourceCriteria) -> list[str]:
        directories = self.directories
        if directories is None:
            directories = [Path(d) for d in get_classpath_directories(self.environment)]

        prefix = _normalize_base_path(base_path)
        if prefix is None:
            logger.debug(f"[sources] Base path '{base_path}' leaves the classpath root, nothing to list")
            return []

        resource_names = []
        for directory in directories:
            search_root = directory.joinpath(*prefix.split("/")) if prefix else directory
            if not search_root.is_dir():
                continue
            # A symlinked base path may point outside the directory
            if not search_root.resolve().is_relative_to(directory.resolve()):
                logger.debug(f"[sources] Skipping {search_root}, it resolves outside {directory}")
                continue
            for root, dirnames, filenames in os.walk(search_root):
                dirnames.sort()
                for filename in sorted(filenames):
                    file_path = Path(root) / filename
                    name = file_path.relative_to(directory).as_posix()
                    if file_path.is_file() and criteria.matches(name):
                        resource_names.append(name)
        logger.debug(f"[sources] {len(resource_names)} directory resources under '{base_path}'")
        return resource_names


class ArchiveResourceListSource(ResourceListSource):
    """Lists entries below base_path in each classpath archive."""

    def __init__(
        self,
        archives: Iterable[str | Path] | None = None,
        environment: DiscoveryEnvironment | None = None,
    ):
        """Initialize with the archives to search.

        Args:
            archives: Fixed archive files to search. If None, the classpath
                archives are discovered on every call.
            environment: Process view used for discovery (default: live process)
        """
        self.archives = None if archives is None else [Path(a) for a in archives]
        self.environment = environment

    def get_resources(self, base_path: str, criteria: ResourceCriteria) -> list[str]:
        archives = self.archives
        if archives is None:
            archives = [Path(a) for a in get_classpath_archives(self.environment)]

        prefix = _normalize_base_path(base_path)
        if prefix is None:
            logger.debug(f"[sources] Base path '{base_path}' leaves the archive root, nothing to list")
            return []

        resource_names = []
        for archive in archives:
            try:
                with zipfile.ZipFile(archive) as zf:
                    entries = zf.infolist()
            except (OSError, zipfile.BadZipFile) as e:
                logger.warning(f"[sources] Skipping unreadable archive {archive}: {e}")
                continue
            for entry in entries:
                if entry.is_dir():
                    continue
                if prefix and not entry.filename.startswith(prefix + "/"):
                    continue
                if criteria.matches(entry.filename):
                    resource_names.append(entry.filename)
        return resource_names


class StandardResourceListSource(AggregateResourceListSource):
    """Searches classpath directories, then classpath archives."""

    def __init__(self, environment: DiscoveryEnvironment | None = None):
        super().__init__(
            [
                DirectoryResourceListSource(environment=environment),
                ArchiveResourceListSource(environment=environment),
            ]
        )
