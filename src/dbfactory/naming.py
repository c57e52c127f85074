"""
Column name canonicalization and nested-object assembly.

`to_camel` folds raw identifiers into camelCase:

    user_id      -> userId
    USER_ID      -> userId
    _user__id_   -> userId
    userId       -> userId
    UserId       -> userId

`set_nest_obj` expands a delimited key path into nested dicts:

    set_nest_obj({}, 'profile.city', 'NY') -> {'profile': {'city': 'NY'}}
"""
import re
from typing import Any

__all__ = ['to_camel', 'set_nest_obj', 'PATH_DELIMITER']

PATH_DELIMITER = '.'

_SEPARATORS = re.compile(r'[_\-\s]+')


def to_camel(name: str) -> str:
    """Fold a snake_case (or otherwise separated) identifier into camelCase.

    Without separators only the first character is lowercased so an already
    canonical name comes back unchanged.
    """
    if not name:
        return ''

    if not _SEPARATORS.search(name):
        return name[0].lower() + name[1:]

    segments = [s for s in _SEPARATORS.split(name) if s]
    if not segments:
        return ''

    head, *tail = segments
    return head.lower() + ''.join(s.lower().capitalize() for s in tail)


def set_nest_obj(target: dict[str, Any], path: str, value: Any,
                 delimiter: str = PATH_DELIMITER) -> dict[str, Any]:
    """Write value into target at a delimited key path.

    Intermediate dicts are created when missing and reused when present. A
    path without the delimiter is a plain key. A non-dict value already
    sitting on the path is replaced by a dict.
    """
    *parents, leaf = path.split(delimiter)
    node = target
    for key in parents:
        child = node.get(key)
        if not isinstance(child, dict):
            child = node[key] = {}
        node = child
    node[leaf] = value
    return target
