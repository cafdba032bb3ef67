'''Typed permission bitmasks built from ordered flag names and named roles'''
from permkit.errors import *
from permkit.kit import PermissionKit, create_permissions
from permkit.specification import PermissionSpecification
from permkit.strict import StrictPermissionKit, create_strict_permissions, validate_specification
from permkit.flags import derive_flag_enum
from permkit.serialization import to_decimal, to_hex, parse_permission, dump_permission, load_permission, dump_kit
from permkit.config import KitConfig, load_config, load_kit
from permkit.typing import Permission

__version__ = '0.0.1'
