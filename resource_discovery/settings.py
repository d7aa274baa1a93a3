"""Settings file support for discovery.

A settings file can pin the inputs discovery would otherwise read from the
process, for example to describe a Tomcat layout on a machine without one:

    discovery:
      class_path: /opt/app/classes:/opt/app/lib/app.jar
      properties:
        catalina.home: /opt/tomcat
        common.loader: ${catalina.home}/lib,${catalina.home}/lib/*.jar
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import ValidationError

from .environment import DiscoveryEnvironment
from .errors import SettingsError

logger = logging.getLogger(__name__)


class DiscoverySettings(BaseModel):
    """The discovery: section of a settings file."""

    model_config = ConfigDict(extra="forbid")

    class_path: str | None = None
    path_separator: str | None = None
    properties: dict[str, str] = {}


def read_settings(path: Path) -> DiscoverySettings | None:
    """Read the discovery section of a YAML settings file.

    Args:
        path: Settings file to read

    Returns:
        Parsed settings, or None if the file or section is missing

    Raises:
        SettingsError: File is not valid YAML or the section is malformed
    """
    if not path.exists():
        return None

    try:
        with open(path, encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SettingsError(path, f"invalid YAML: {e}") from e

    if not config:
        return None
    if not isinstance(config, dict):
        raise SettingsError(path, "top level must be a mapping")
    if "discovery" not in config:
        return None

    try:
        return DiscoverySettings.model_validate(config["discovery"] or {})
    except ValidationError as e:
        raise SettingsError(path, f"invalid discovery section: {e}") from e


def load_environment(path: str | Path, base: DiscoveryEnvironment | None = None) -> DiscoveryEnvironment:
    """Build a discovery environment from a settings file.

    Settings override the matching fields of base; properties are merged
    with settings taking precedence.

    Args:
        path: Settings file to read
        base: Environment to start from (default: the live process)

    Returns:
        The resulting environment (base itself if the file has no settings)
    """
    if base is None:
        base = DiscoveryEnvironment.from_process()

    settings = read_settings(Path(path))
    if settings is None:
        logger.debug(f"[settings] No discovery settings in {path}")
        return base

    changes: dict = {"properties": {**base.properties, **settings.properties}}
    if settings.class_path is not None:
        changes["class_path"] = settings.class_path
    if settings.path_separator is not None:
        changes["path_separator"] = settings.path_separator

    try:
        return base.with_overrides(**changes)
    except ValidationError as e:
        raise SettingsError(path, f"invalid discovery section: {e}") from e
