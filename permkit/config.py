'''Loading permission kits from TOML configuration files'''
import logging
from pathlib import Path
from typing import Annotated, Any, Union

from permkit.errors import ConfigurationError
from permkit.kit import PermissionKit
from permkit.specification import PermissionSpecification
from permkit.strict import StrictPermissionKit, create_strict_permissions

import pytomlpp
from pydantic import Field, ValidationError

__all__ = ('KitConfig', 'load_config', 'load_kit')

logger = logging.getLogger(__name__)

class KitConfig(PermissionSpecification):
    strict: Annotated[bool, Field(default=False, frozen=True)]

    def to_specification(self) -> PermissionSpecification:
        # Already validated, constructing again would repeat the duplicate flag warning
        return PermissionSpecification.model_construct(flags=self.flags, roles=self.roles)

def load_config(filepath: Union[str, Path]) -> KitConfig:
    '''Read and validate a kit configuration.

    The document holds a top level `flags` array, an optional `[roles]` table mapping role names to
    arrays of flag names, and an optional `strict` boolean.

    Raises:
        ConfigurationError: If the file is missing, is not valid TOML, or does not describe a valid kit.
    '''
    filepath = Path(filepath)
    if not filepath.is_file():
        raise ConfigurationError(f'Permission configuration {filepath} not found')

    try:
        loaded: dict[str, Any] = pytomlpp.load(filepath)
    except pytomlpp.DecodeError as e:
        raise ConfigurationError(f'Permission configuration {filepath} is not valid TOML: {e}') from e

    try:
        config: KitConfig = KitConfig.model_validate(loaded)
    except ValidationError as e:
        raise ConfigurationError(f'Permission configuration {filepath} is invalid: {e}') from e

    logger.debug('Loaded permission configuration from %s (strict=%s)', filepath, config.strict)
    return config

def load_kit(filepath: Union[str, Path]) -> Union[PermissionKit, StrictPermissionKit]:
    config: KitConfig = load_config(filepath)
    if config.strict:
        return create_strict_permissions(config.to_specification())
    return PermissionKit(config.to_specification())
