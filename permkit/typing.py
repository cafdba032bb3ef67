'''Typing support for permission values and kit names'''
from typing import TypeAlias

__all__ = ('Permission',
           'FlagName',
           'RoleName')

Permission: TypeAlias = int
FlagName: TypeAlias = str
RoleName: TypeAlias = str
