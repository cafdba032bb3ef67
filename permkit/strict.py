'''Opt-in strict validation around the lenient permission kit'''
import logging
from types import MappingProxyType
from typing import Any, Final, Iterable, Mapping, Union

from permkit.errors import DuplicateFlagError, InvalidPermissionError, UnknownFlagError, UnknownRoleFlagError
from permkit.kit import PermissionKit
from permkit.specification import PermissionSpecification
from permkit.typing import FlagName, Permission, RoleName

__all__ = ('validate_specification', 'StrictPermissionKit', 'create_strict_permissions')

logger = logging.getLogger(__name__)

def validate_specification(specification: PermissionSpecification) -> PermissionSpecification:
    '''Reject specifications that the lenient kit would silently accept.

    Raises:
        DuplicateFlagError: If a flag name is declared more than once.
        UnknownRoleFlagError: If a role lists a flag name that is not declared. Reported for the first such role only.
    '''
    if duplicates := specification.duplicate_flags:
        logger.warning('Rejecting specification with duplicate flags: %s', duplicates)
        raise DuplicateFlagError(duplicates)

    for role, names in specification.undeclared_role_flags().items():
        logger.warning('Rejecting specification, role %s references undeclared flags: %s', role, names)
        raise UnknownRoleFlagError(role, names)

    return specification


class StrictPermissionKit:
    '''Wraps a `PermissionKit`, raising instead of ignoring unknown names and stray bits.

    Every permission or mask handed in must be non-negative and composed only of declared flag bits.
    '''
    __slots__ = ('_kit',)

    def __init__(self, kit: PermissionKit):
        self._kit: Final[PermissionKit] = kit

    @property
    def kit(self) -> PermissionKit:
        return self._kit
    @property
    def flags(self) -> tuple[FlagName, ...]:
        return self._kit.flags
    @property
    def bits(self) -> MappingProxyType[FlagName, Permission]:
        return self._kit.bits
    @property
    def roles(self) -> MappingProxyType[RoleName, Permission]:
        return self._kit.roles
    @property
    def mask(self) -> Permission:
        return self._kit.mask

    def __contains__(self, name: object) -> bool:
        return name in self._kit

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__}({self._kit!r})>'

    def check(self, *values: Permission) -> None:
        for value in values:
            value = int(value)
            if value < 0 or self._kit.unknown_bits(value):
                logger.warning('Permission value %d contains undeclared bits', value)
                raise InvalidPermissionError(value)

    def set(self, p: Permission, mask: Permission) -> Permission:
        self.check(p, mask)
        return self._kit.set(p, mask)

    def clear(self, p: Permission, mask: Permission) -> Permission:
        self.check(p, mask)
        return self._kit.clear(p, mask)

    def toggle(self, p: Permission, mask: Permission) -> Permission:
        self.check(p, mask)
        return self._kit.toggle(p, mask)

    def has_all(self, p: Permission, mask: Permission) -> bool:
        self.check(p, mask)
        return self._kit.has_all(p, mask)

    def has_any(self, p: Permission, mask: Permission) -> bool:
        self.check(p, mask)
        return self._kit.has_any(p, mask)

    def to_names(self, p: Permission) -> list[FlagName]:
        self.check(p)
        return self._kit.to_names(p)

    def from_names(self, names: Iterable[FlagName]) -> Permission:
        if isinstance(names, str):
            names = (names,)
        names = tuple(names)

        if unknown := tuple(dict.fromkeys(name for name in names if name not in self._kit)):
            logger.warning('Unknown flag names requested: %s', unknown)
            raise UnknownFlagError(unknown)
        return self._kit.from_names(names)

    def to_roles(self, p: Permission) -> list[RoleName]:
        self.check(p)
        return self._kit.to_roles(p)

    def unknown_bits(self, p: Permission) -> Permission:
        return self._kit.unknown_bits(p)


def create_strict_permissions(specification: Union[PermissionSpecification, Mapping[str, Any]]) -> StrictPermissionKit:
    if not isinstance(specification, PermissionSpecification):
        specification = PermissionSpecification.model_validate(dict(specification))
    return StrictPermissionKit(PermissionKit(validate_specification(specification)))
