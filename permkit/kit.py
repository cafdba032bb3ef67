'''Permission kit factory and the kit it produces.

A kit maps each declared flag name to a single bit (`1 << index`, index being the
flag's position in declaration order) and each role name to the OR of its flags' bits.
All operations are pure: they take plain integers and return new ones, never touching
the kit's own mappings. A constructed kit can therefore be shared freely.

Unknown names are never an error here. `from_names` and role resolution skip them,
contributing no bits. Strict validation lives in `permkit.strict`.
'''
import logging
from types import MappingProxyType
from typing import Any, Final, Iterable, Mapping, Union

from permkit.specification import PermissionSpecification
from permkit.typing import FlagName, Permission, RoleName

__all__ = ('PermissionKit', 'create_permissions')

logger = logging.getLogger(__name__)

class PermissionKit:
    __slots__ = ('__weakref__', '_flags', '_bits', '_roles', '_mask')

    def __init__(self, specification: PermissionSpecification):
        bits: dict[FlagName, Permission] = {}
        for idx, name in enumerate(specification.flags):
            bits[name] = 1 << idx

        roles: dict[RoleName, Permission] = {}
        for role, names in specification.roles.items():
            mask: Permission = 0
            for name in names:
                bit = bits.get(name)
                if bit is None:
                    logger.debug('Role %s references undeclared flag %s, skipping', role, name)
                    continue
                mask |= bit
            roles[role] = mask

        all_bits: Permission = 0
        for bit in bits.values():
            all_bits |= bit

        self._flags: Final[tuple[FlagName, ...]] = tuple(bits)
        self._bits: Final[MappingProxyType[FlagName, Permission]] = MappingProxyType(bits)
        self._roles: Final[MappingProxyType[RoleName, Permission]] = MappingProxyType(roles)
        self._mask: Final[Permission] = all_bits

        logger.debug('Created permission kit with %d flags and %d roles', len(bits), len(roles))

    @property
    def flags(self) -> tuple[FlagName, ...]:
        return self._flags
    @property
    def bits(self) -> MappingProxyType[FlagName, Permission]:
        return self._bits
    @property
    def roles(self) -> MappingProxyType[RoleName, Permission]:
        return self._roles
    @property
    def mask(self) -> Permission:
        '''Union of every declared flag bit'''
        return self._mask

    def __contains__(self, name: object) -> bool:
        return name in self._bits

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__}(flags={list(self._flags)}, roles={list(self._roles)}) at location {id(self)}>'

    # Mutators, each returning a new value
    def set(self, p: Permission, mask: Permission) -> Permission:
        return int(p) | int(mask)

    def clear(self, p: Permission, mask: Permission) -> Permission:
        return int(p) & ~int(mask)

    def toggle(self, p: Permission, mask: Permission) -> Permission:
        return int(p) ^ int(mask)

    # Queries
    def has_all(self, p: Permission, mask: Permission) -> bool:
        mask = int(mask)
        return (int(p) & mask) == mask

    def has_any(self, p: Permission, mask: Permission) -> bool:
        return (int(p) & int(mask)) != 0

    def to_names(self, p: Permission) -> list[FlagName]:
        p = int(p)
        return [name for name, bit in self._bits.items() if p & bit]

    def from_names(self, names: Iterable[FlagName]) -> Permission:
        if isinstance(names, str):
            names = (names,)

        mask: Permission = 0
        for name in names:
            bit = self._bits.get(name)
            if bit is not None:
                mask |= bit
        return mask

    def to_roles(self, p: Permission) -> list[RoleName]:
        '''Names of the roles whose every flag is held by `p`, in declaration order'''
        return [role for role, mask in self._roles.items() if self.has_all(p, mask)]

    def unknown_bits(self, p: Permission) -> Permission:
        '''Bits of `p` that no declared flag accounts for'''
        return int(p) & ~self._mask


def create_permissions(specification: Union[PermissionSpecification, Mapping[str, Any]]) -> PermissionKit:
    '''Build a permission kit.

    Args:
        specification (PermissionSpecification | Mapping[str, Any]): Either a validated specification, or a mapping with
            a `flags` sequence and an optional `roles` mapping, which is validated into one.

    Returns:
        PermissionKit: Immutable kit holding the flag bits, the role masks and the bitmask operations.

    Raises:
        pydantic.ValidationError: If a mapping is given and it does not describe a valid specification.
    '''
    if not isinstance(specification, PermissionSpecification):
        specification = PermissionSpecification.model_validate(dict(specification))
    return PermissionKit(specification)
