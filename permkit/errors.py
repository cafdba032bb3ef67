from typing import Iterable, Optional

__all__ = ('PermissionKitError',
           'ConfigurationError',
           'DuplicateFlagError',
           'UnknownRoleFlagError',
           'UnknownFlagError',
           'InvalidPermissionError',
           'PermissionParseError')

class PermissionKitError(Exception):
    '''Base exception for all permkit errors. Carries a human readable description, defaulting to the class-level one'''
    description: str = 'Permission kit error'

    def __init__(self, description: Optional[str] = None):
        self.description = description or self.__class__.description
        super().__init__(self.description)


class ConfigurationError(PermissionKitError):
    description: str = 'Invalid permission kit configuration'

class DuplicateFlagError(ConfigurationError):
    description: str = 'Flag names declared more than once: {names}'

    def __init__(self, names: Iterable[str], description: Optional[str] = None):
        self.names: tuple[str, ...] = tuple(names)
        super().__init__((description or DuplicateFlagError.description).format(names=', '.join(self.names)))

class UnknownRoleFlagError(ConfigurationError):
    description: str = 'Role {role} references undeclared flags: {names}'

    def __init__(self, role: str, names: Iterable[str], description: Optional[str] = None):
        self.role = role
        self.names: tuple[str, ...] = tuple(names)
        super().__init__((description or UnknownRoleFlagError.description).format(role=role, names=', '.join(self.names)))

class UnknownFlagError(PermissionKitError):
    description: str = 'Unknown flag names: {names}'

    def __init__(self, names: Iterable[str], description: Optional[str] = None):
        self.names: tuple[str, ...] = tuple(names)
        super().__init__((description or UnknownFlagError.description).format(names=', '.join(self.names)))

class InvalidPermissionError(PermissionKitError):
    description: str = 'Permission value {value} is not composed of declared flag bits'

    def __init__(self, value: int, description: Optional[str] = None):
        self.value = value
        super().__init__((description or InvalidPermissionError.description).format(value=value))

class PermissionParseError(PermissionKitError, ValueError):
    description: str = 'Unable to parse permission value from {text!r}'

    def __init__(self, text: str, description: Optional[str] = None):
        self.text = text
        super().__init__((description or PermissionParseError.description).format(text=text))
