import pytest

from permkit import PermissionKit, create_permissions

FLAGS = ('Deprecated', 'CanUpdateUsername', 'CanUpdateProfilePicture', 'CanBlacklistUser')
ROLES = {
    'User' : ['CanUpdateUsername', 'CanUpdateProfilePicture'],
    'Admin' : ['CanUpdateUsername', 'CanUpdateProfilePicture', 'CanBlacklistUser'],
}

@pytest.fixture
def definition() -> dict:
    return {'flags' : list(FLAGS), 'roles' : {role : list(names) for role, names in ROLES.items()}}

@pytest.fixture
def perms(definition) -> PermissionKit:
    return create_permissions(definition)

@pytest.fixture
def bits(perms):
    return perms.bits
