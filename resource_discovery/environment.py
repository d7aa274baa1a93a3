"""Read-only view of the process state that discovery depends on.

Discovery functions take a DiscoveryEnvironment instead of reading globals,
so tests and host applications can describe a process without mutating it.
"""

import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from .loaders import get_context_loader

CATALINA_HOME_PROPERTY = "catalina.home"
COMMON_LOADER_PROPERTY = "common.loader"

# Process environment variables that feed the named properties
PROPERTY_ENV_VARS: dict[str, str] = {
    CATALINA_HOME_PROPERTY: "CATALINA_HOME",
    COMMON_LOADER_PROPERTY: "CATALINA_COMMON_LOADER",
}

CLASS_PATH_ENV_VAR = "PYTHONPATH"


class DiscoveryEnvironment(BaseModel):
    """Snapshot of the inputs to classpath discovery.

    Attributes:
        context_loader: Loader the chain walk starts from (None for no walk)
        class_path: Process-wide path list string
        path_separator: Separator used to split class_path
        properties: Named process properties (catalina.home, common.loader, ...)
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    context_loader: Any = None
    class_path: str = ""
    path_separator: str = Field(default=os.pathsep, min_length=1)
    properties: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_process(cls, environ: Mapping[str, str] | None = None) -> "DiscoveryEnvironment":
        """Capture the calling thread's context loader and the process environment.

        Args:
            environ: Environment variables to read (default: os.environ)

        Returns:
            DiscoveryEnvironment reflecting the live process
        """
        if environ is None:
            environ = os.environ

        properties = {}
        for name, env_var in PROPERTY_ENV_VARS.items():
            value = environ.get(env_var)
            if value is not None:
                properties[name] = value

        return cls(
            context_loader=get_context_loader(),
            class_path=environ.get(CLASS_PATH_ENV_VAR, ""),
            path_separator=os.pathsep,
            properties=properties,
        )

    def get_property(self, name: str) -> str | None:
        return self.properties.get(name)

    def with_overrides(self, **changes: Any) -> "DiscoveryEnvironment":
        """Return a copy with the given fields replaced (validated)."""
        data = {name: getattr(self, name) for name in type(self).model_fields}
        data.update(changes)
        return type(self).model_validate(data)
