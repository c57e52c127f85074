import pytest
from dbfactory.naming import set_nest_obj, to_camel


@pytest.mark.parametrize(('name', 'expected'), [
    ('user_id', 'userId'),
    ('first_name', 'firstName'),
    ('USER_ID', 'userId'),
    ('created_at_utc', 'createdAtUtc'),
    ('_user__id_', 'userId'),
    ('user-id', 'userId'),
    ('user id', 'userId'),
    ('userId', 'userId'),
    ('UserId', 'userId'),
    ('id', 'id'),
    ('ID', 'iD'),
    ('A', 'a'),
    ('x', 'x'),
    ('a_b', 'aB'),
    ('col_1', 'col1'),
])
def test_to_camel(name, expected):
    """Test camelCase folding of raw column names"""
    assert to_camel(name) == expected


@pytest.mark.parametrize('name', ['', '_', '___', '-_ -'])
def test_to_camel_empty_and_separator_only(name):
    """Test empty and separator-only names fold to an empty string"""
    assert to_camel(name) == ''


@pytest.mark.parametrize('name', [
    'user_id', 'USER_ID', 'UserId', 'userId', '_a_', 'a', 'Z', 'order_line_item_no',
    'Mixed_Case_NAME', 'user-name', 'x1_y2',
])
def test_to_camel_idempotent(name):
    """Test that canonicalizing an already canonical name leaves it unchanged"""
    once = to_camel(name)
    assert to_camel(once) == once


def test_to_camel_deterministic():
    """Test the same input always produces the same output"""
    results = {to_camel('some_column_name') for _ in range(10)}
    assert results == {'someColumnName'}


def test_to_camel_does_not_split_on_path_delimiter():
    """Test that dots are not treated as word separators"""
    assert to_camel('profile.city') == 'profile.city'


def test_set_nest_obj_flat_key():
    """Test a path without delimiter becomes a plain key"""
    assert set_nest_obj({}, 'user_id', 7) == {'user_id': 7}


def test_set_nest_obj_nested_path():
    """Test a dotted path creates intermediate dicts"""
    assert set_nest_obj({}, 'profile.address.city', 'NY') == {
        'profile': {'address': {'city': 'NY'}}
    }


def test_set_nest_obj_shared_prefix_merges():
    """Test paths with a common prefix share one nested dict"""
    target = {}
    set_nest_obj(target, 'profile.city', 'NY')
    set_nest_obj(target, 'profile.zip', '10001')
    set_nest_obj(target, 'id', 1)
    assert target == {'profile': {'city': 'NY', 'zip': '10001'}, 'id': 1}


def test_set_nest_obj_returns_target():
    """Test the target dict is updated in place and returned"""
    target = {'a': 1}
    result = set_nest_obj(target, 'b', 2)
    assert result is target
    assert target == {'a': 1, 'b': 2}


def test_set_nest_obj_replaces_scalar_on_path():
    """Test a scalar in the way of a path is replaced by a dict"""
    target = {'profile': 'unset'}
    set_nest_obj(target, 'profile.city', 'NY')
    assert target == {'profile': {'city': 'NY'}}


def test_set_nest_obj_custom_delimiter():
    """Test an alternative path delimiter"""
    assert set_nest_obj({}, 'a__b', 1, delimiter='__') == {'a': {'b': 1}}


if __name__ == '__main__':
    __import__('pytest').main([__file__])
