"""Resource discovery - classpath introspection and resource matching.

Public API:
- get_classpath_components / get_classpath_directories / get_classpath_archives
- DiscoveryEnvironment: Read-only view of the process inputs to discovery
- UrlLoader, PathListLoader: Loader chain model and context loader slot
- ResourceCriteria, RegexResourceCriteria: Resource name predicates
- ResourceListSource and its implementations
- load_environment: Build an environment from a YAML settings file

Host applications that want discovery logs as JSONL call
resource_discovery.logging_setup.init_json_logging() early at startup;
the library itself only logs through module loggers.
"""

from .classpath import get_classpath_archives
from .classpath import get_classpath_components
from .classpath import get_classpath_directories
from .classpath import get_loader_classpath_components
from .criteria import RegexResourceCriteria
from .criteria import ResourceCriteria
from .environment import DiscoveryEnvironment
from .errors import DiscoveryError
from .errors import InvalidSourceListError
from .errors import SettingsError
from .loaders import PathListLoader
from .loaders import UrlLoader
from .loaders import context_loader
from .loaders import get_context_loader
from .loaders import set_context_loader
from .settings import load_environment
from .sources import AggregateResourceListSource
from .sources import ArchiveResourceListSource
from .sources import DirectoryResourceListSource
from .sources import ResourceListSource
from .sources import StandardResourceListSource

__all__ = [
    "get_classpath_components",
    "get_classpath_directories",
    "get_classpath_archives",
    "get_loader_classpath_components",
    "DiscoveryEnvironment",
    "UrlLoader",
    "PathListLoader",
    "context_loader",
    "get_context_loader",
    "set_context_loader",
    "ResourceCriteria",
    "RegexResourceCriteria",
    "ResourceListSource",
    "AggregateResourceListSource",
    "DirectoryResourceListSource",
    "ArchiveResourceListSource",
    "StandardResourceListSource",
    "load_environment",
    "DiscoveryError",
    "InvalidSourceListError",
    "SettingsError",
]
