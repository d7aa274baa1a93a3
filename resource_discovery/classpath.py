"""Classpath discovery.

The classpath is the union of:
1. The URLs of every loader in the context loader's parent chain
2. The entries of the process-wide class path string

Results are recomputed on every call; two calls can differ if the process
changed in between.
"""

import logging
from pathlib import Path

from .environment import CATALINA_HOME_PROPERTY
from .environment import COMMON_LOADER_PROPERTY
from .environment import DiscoveryEnvironment
from .loaders import iter_loader_chain
from .loaders import normalize_path
from .loaders import url_to_path

logger = logging.getLogger(__name__)

ARCHIVE_EXTENSIONS = (".jar", ".zip")

# Loaders that hide their search path behind a non-standard accessor,
# keyed by fully qualified type name
ALTERNATE_URL_ACCESSORS: dict[str, str] = {
    "org.jboss.mx.loading.UnifiedClassLoader3": "get_classpath",
}

CATALINA_HOME_PLACEHOLDER = "${catalina.home}"


def get_classpath_components(environment: DiscoveryEnvironment | None = None) -> list[str]:
    """Return the classpath as a list of directory and archive paths.

    Args:
        environment: Process view to read (default: the live process)

    Returns:
        Normalized paths without duplicates, in no particular order; empty if
        nothing was found
    """
    if environment is None:
        environment = DiscoveryEnvironment.from_process()

    components = []

    for loader in iter_loader_chain(environment.context_loader):
        components.extend(get_loader_classpath_components(loader))

    # The loader chain can miss entries, so add the process class path too
    for token in environment.class_path.split(environment.path_separator):
        if token:
            components.append(normalize_path(token))

    return list(set(components))


def get_loader_classpath_components(loader) -> list[str]:
    """Return the normalized paths a single loader searches.

    Loaders registered in ALTERNATE_URL_ACCESSORS are asked through their
    alternate accessor; if that fails the loader contributes nothing.
    """
    type_name = _qualified_type_name(loader)
    accessor_name = ALTERNATE_URL_ACCESSORS.get(type_name)

    if accessor_name is not None:
        try:
            accessor = getattr(loader, accessor_name)
            urls = list(accessor())
        except Exception as e:
            logger.debug(f"[classpath] Error invoking {accessor_name} on {type_name}: {e}", exc_info=True)
            urls = []
    else:
        urls = loader.get_urls()

    return [url_to_path(url) for url in urls]


def get_classpath_directories(environment: DiscoveryEnvironment | None = None) -> list[str]:
    """Return the classpath components that are directories.

    Tomcat common loader paths are appended as-is, without existence checks
    or dedup against the directories found.

    Returns:
        List of directory paths; empty if none were found
    """
    if environment is None:
        environment = DiscoveryEnvironment.from_process()

    directories = [c for c in get_classpath_components(environment) if Path(c).is_dir()]

    tomcat_paths = _get_tomcat_paths(environment)
    if tomcat_paths is not None:
        directories.extend(tomcat_paths)
    return directories


def get_classpath_archives(environment: DiscoveryEnvironment | None = None) -> list[str]:
    """Return the classpath components that are .jar or .zip files.

    Returns:
        List of archive paths; empty if none were found
    """
    archives = []
    for component in get_classpath_components(environment):
        path = Path(component)
        if path.is_file() and path.name.endswith(ARCHIVE_EXTENSIONS):
            archives.append(component)
    return archives


def _get_tomcat_paths(environment: DiscoveryEnvironment) -> list[str] | None:
    """Expand the Tomcat common.loader property into a list of paths.

    Returns:
        Paths from common.loader with ${catalina.home} substituted, or None
        when not running under Tomcat
    """
    tomcat_home = environment.get_property(CATALINA_HOME_PROPERTY)
    if tomcat_home is None:
        return None

    common_loader = environment.get_property(COMMON_LOADER_PROPERTY)
    if common_loader is None:
        return None

    # One occurrence per pass; the search resumes after the inserted home
    # value so that value is never expanded again. Rescanning from index 0
    # would never end for a home value that contains the placeholder; here
    # that placeholder text is kept literally instead.
    search_from = 0
    while True:
        start = common_loader.find(CATALINA_HOME_PLACEHOLDER, search_from)
        if start < 0:
            break
        common_loader = common_loader[:start] + tomcat_home + common_loader[start + len(CATALINA_HOME_PLACEHOLDER) :]
        search_from = start + len(tomcat_home)

    logger.debug(f"[classpath] Tomcat common loader expanded to {common_loader}")
    return common_loader.split(",")


def _qualified_type_name(obj) -> str:
    cls = type(obj)
    return f"{cls.__module__}.{cls.__qualname__}"
