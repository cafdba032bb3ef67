import pytest
from pydantic import ValidationError

from permkit import PermissionSpecification, create_permissions


def test_lists_are_cast_to_tuples():
    definition = PermissionSpecification.model_validate({'flags' : ['A', 'B'], 'roles' : {'R' : ['A']}})
    assert definition.flags == ('A', 'B')
    assert definition.roles['R'] == ('A',)

def test_roles_default_to_empty():
    assert PermissionSpecification(flags=('A',)).roles == {}
    assert PermissionSpecification.model_validate({'flags' : ['A'], 'roles' : None}).roles == {}

@pytest.mark.parametrize('flags', [['A', ''], ['A', 1], 'AB', {'A', 'B'}, frozenset({'A'}), {'A' : 1, 'B' : 2}, 5])
def test_invalid_flags_rejected(flags):
    with pytest.raises(ValidationError):
        PermissionSpecification.model_validate({'flags' : flags})

def test_role_as_single_string_rejected():
    with pytest.raises(ValidationError):
        PermissionSpecification.model_validate({'flags' : ['A'], 'roles' : {'R' : 'A'}})

def test_missing_flags_rejected():
    with pytest.raises(ValidationError):
        create_permissions({'roles' : {}})

def test_specification_is_frozen():
    definition = PermissionSpecification(flags=('A',))
    with pytest.raises(ValidationError):
        definition.flags = ('B',)

def test_duplicate_flags_reported():
    with pytest.warns(RuntimeWarning, match='A'):
        definition = PermissionSpecification(flags=('A', 'B', 'A'))
    assert definition.duplicate_flags == ('A',)

def test_undeclared_role_flags():
    definition = PermissionSpecification(flags=('A', 'B'), roles={'Ok' : ('A',), 'Bad' : ('B', 'X', 'Y')})
    assert definition.undeclared_role_flags() == {'Bad' : ('X', 'Y')}

def test_iterators_keep_their_order():
    definition = PermissionSpecification.model_validate({'flags' : (name for name in ['B', 'A'])})
    assert definition.flags == ('B', 'A')

def test_roles_are_read_only():
    definition = PermissionSpecification(flags=('A',), roles={'R' : ('A',)})
    with pytest.raises(TypeError):
        definition.roles['X'] = ('A',)
    with pytest.raises(TypeError):
        PermissionSpecification(flags=('A',)).roles['X'] = ('A',)

def test_duplicate_warning_points_at_caller():
    with pytest.warns(RuntimeWarning) as record:
        PermissionSpecification.model_validate({'flags' : ['A', 'A']})
    assert len(record) == 1
    assert record[0].filename == __file__
