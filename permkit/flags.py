'''Derive IntFlag enumerations from a permission kit, giving flag and role names a static home'''
from enum import IntFlag
from typing import Union

from permkit.kit import PermissionKit
from permkit.strict import StrictPermissionKit
from permkit.typing import Permission

__all__ = ('derive_flag_enum',)

def derive_flag_enum(kit: Union[PermissionKit, StrictPermissionKit],
                     name: str,
                     include_roles: bool = False) -> type[IntFlag]:
    '''Build an `IntFlag` type with one member per declared flag, valued at the flag's bit.

    With `include_roles`, roles are added as composite members after the flags. A role sharing its
    name with a flag is left out, the flag member keeps the name.
    '''
    members: dict[str, Permission] = dict(kit.bits)
    if include_roles:
        for role, mask in kit.roles.items():
            members.setdefault(role, mask)

    return IntFlag(name, members)
