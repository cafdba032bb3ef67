'''Text and JSON helpers for storing permission values outside the process.

Permission values have no width limit, so they are always written as strings:
orjson refuses integers wider than 64 bits.
'''
import re
from typing import Any, Final, Optional, Union

from permkit.errors import PermissionParseError
from permkit.kit import PermissionKit
from permkit.strict import StrictPermissionKit
from permkit.typing import Permission

import orjson

__all__ = ('to_decimal',
           'to_hex',
           'parse_permission',
           'dump_permission',
           'load_permission',
           'dump_kit')

DECIMAL_REGEX: Final[re.Pattern[str]] = re.compile(r'^[0-9]+$')
HEX_REGEX: Final[re.Pattern[str]] = re.compile(r'^0[xX][0-9a-fA-F]+$')

# Decimal text is converted in chunks, keeping every int/str conversion under the interpreter's digit limit
DECIMAL_CHUNK_DIGITS: Final[int] = 1000
DECIMAL_CHUNK: Final[int] = 10 ** DECIMAL_CHUNK_DIGITS

AnyKit = Union[PermissionKit, StrictPermissionKit]

def to_decimal(p: Permission) -> str:
    p = int(p)
    if p < DECIMAL_CHUNK:
        return str(p)

    chunks: list[int] = []
    while p:
        p, chunk = divmod(p, DECIMAL_CHUNK)
        chunks.append(chunk)
    return str(chunks[-1]) + ''.join(str(chunk).zfill(DECIMAL_CHUNK_DIGITS) for chunk in reversed(chunks[:-1]))

def _parse_decimal(digits: str) -> Permission:
    value: Permission = 0
    for start in range(0, len(digits), DECIMAL_CHUNK_DIGITS):
        piece: str = digits[start:start + DECIMAL_CHUNK_DIGITS]
        value = value * 10 ** len(piece) + int(piece)
    return value

def to_hex(p: Permission) -> str:
    return hex(int(p))

def parse_permission(text: Union[str, bytes], base: Optional[int] = None) -> Permission:
    '''Parse a permission value written by `to_decimal` or `to_hex`.

    Args:
        text (str | bytes): Textual permission value. Surrounding whitespace is ignored.
        base (Optional[int]): 10 or 16. When omitted, a `0x` prefix selects hexadecimal, anything else decimal.

    Returns:
        Permission: The exact integer the text encodes.

    Raises:
        PermissionParseError: If the text is empty, negative, or not a number in the selected base.
    '''
    if isinstance(text, bytes):
        text = text.decode('ascii', errors='replace')
    stripped: str = text.strip()

    if base is None:
        base = 16 if HEX_REGEX.match(stripped) else 10
    if base == 16:
        if not HEX_REGEX.match(stripped):
            stripped = f'0x{stripped}'
        if not HEX_REGEX.match(stripped):
            raise PermissionParseError(text)
    elif base == 10:
        if not DECIMAL_REGEX.match(stripped):
            raise PermissionParseError(text)
        return _parse_decimal(stripped)
    else:
        raise ValueError(f'Unsupported base {base}, must be 10 or 16')

    return int(stripped, 16)

def dump_permission(kit: AnyKit, p: Permission) -> bytes:
    '''Serialise a permission as JSON carrying both its hexadecimal value and its flag names'''
    return orjson.dumps({'value' : to_hex(p), 'names' : kit.to_names(p)})

def load_permission(kit: AnyKit, data: Union[bytes, str]) -> Permission:
    '''Inverse of `dump_permission`. Names take precedence over the raw value, so documents written
    before flags were removed still load, dropping the removed ones.

    Raises:
        PermissionParseError: If the document holds neither a name list of strings nor a parsable value.
    '''
    try:
        document: Any = orjson.loads(data)
    except orjson.JSONDecodeError as e:
        raise PermissionParseError(data if isinstance(data, str) else data.decode('utf-8', errors='replace')) from e

    if not isinstance(document, dict):
        raise PermissionParseError(str(document), 'Permission document must be a JSON object')

    if isinstance(names := document.get('names'), list):
        if not all(isinstance(name, str) for name in names):
            raise PermissionParseError(str(document), 'Permission document names must be strings')
        return kit.from_names(names)
    if isinstance(value := document.get('value'), str):
        return parse_permission(value)

    raise PermissionParseError(str(document), 'Permission document has neither names nor value')

def dump_kit(kit: AnyKit) -> bytes:
    '''Describe a kit as JSON: flag bits and role masks as hexadecimal strings, plus each role's flag names'''
    return orjson.dumps({'flags' : {name : to_hex(bit) for name, bit in kit.bits.items()},
                         'roles' : {role : {'mask' : to_hex(mask), 'names' : kit.to_names(mask)}
                                    for role, mask in kit.roles.items()}})
