'''Module defining the construction input of a permission kit'''
import os
import warnings
from collections import Counter
from collections.abc import Iterator, Sequence, Set
from types import MappingProxyType
from typing import Annotated, Final, Mapping

from typing_extensions import Self

import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

__all__ = ('FlagNameField', 'PermissionSpecification')

# Warnings are attributed to the first frame outside these packages
_INTERNAL_PREFIXES: Final[tuple[str, ...]] = (os.path.dirname(pydantic.__file__) + os.sep,
                                              os.path.dirname(__file__) + os.sep)

FlagNameField = Annotated[str, Field(min_length=1)]

class PermissionSpecification(BaseModel):
    '''Ordered flag names, plus an optional mapping of role names to the flag names they bundle.

    Declaration order of `flags` decides bit positions, so it must stay stable for as long as
    permission values produced from it are stored anywhere. Unordered collections are rejected.
    `roles` is exposed as a read-only mapping.
    '''
    model_config = ConfigDict(frozen=True, strict=True)

    flags: Annotated[tuple[FlagNameField, ...], Field(frozen=True)]
    roles: Annotated[Mapping[str, tuple[str, ...]], Field(default_factory=dict, frozen=True, validate_default=True)]

    @field_validator('flags', mode='before')
    @classmethod
    def cast_flags(cls, flags):
        if isinstance(flags, (str, bytes)):
            raise ValueError('Flags must be a sequence of names, not a single string')
        if isinstance(flags, (Set, Mapping)) or not isinstance(flags, (Sequence, Iterator)):
            raise ValueError(f'Flags must be an ordered sequence of names, got {type(flags).__name__}')
        return tuple(flags)

    @field_validator('roles', mode='before')
    @classmethod
    def cast_roles(cls, roles):
        if roles is None:
            return {}
        if not isinstance(roles, Mapping):
            raise ValueError('Roles must be a mapping of role names to flag names')
        cast: dict[str, tuple[str, ...]] = {}
        for role, names in roles.items():
            if isinstance(names, str):
                raise ValueError(f'Role {role} must list flag names, not a single string')
            cast[role] = tuple(names)
        return cast

    @field_validator('roles', mode='after')
    @classmethod
    def freeze_roles(cls, roles: Mapping[str, tuple[str, ...]]) -> Mapping[str, tuple[str, ...]]:
        return MappingProxyType(dict(roles))

    @model_validator(mode='after')
    def warn_duplicate_flags(self) -> Self:
        if duplicates := self.duplicate_flags:
            warnings.warn(f'Flag names declared more than once, last declaration wins: {", ".join(duplicates)}',
                          category=RuntimeWarning, skip_file_prefixes=_INTERNAL_PREFIXES)
        return self

    @property
    def duplicate_flags(self) -> tuple[str, ...]:
        return tuple(name for name, count in Counter(self.flags).items() if count > 1)

    def undeclared_role_flags(self) -> dict[str, tuple[str, ...]]:
        '''Mapping of role name to the flag names it references that `flags` does not declare. Roles without any are omitted'''
        declared: frozenset[str] = frozenset(self.flags)
        undeclared: dict[str, tuple[str, ...]] = {}
        for role, names in self.roles.items():
            if missing := tuple(name for name in names if name not in declared):
                undeclared[role] = missing
        return undeclared
