"""
Pool configuration.

The caller's configuration is opaque except for the pool keys below, which are
removed and handed to SQLAlchemy. Every other key is passed to the DBAPI
driver's connect() untouched.
"""
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any, Self

__all__ = ['PoolOptions', 'split_config']

# Alternate spellings accepted for pool keys
_ALIASES = {
    'connectionLimit': 'pool_size',
}


@dataclass
class PoolOptions:
    """Options

    Connection pooling options:
    - pool_size: Connections kept open in the pool (default: 5)
    - max_overflow: Extra connections allowed beyond pool_size (default: 10)
    - pool_timeout: Maximum seconds to wait for a connection (default: 30)
    - pool_recycle: Seconds after which a connection is replaced (default: 300)
    - pool_pre_ping: Test connections on checkout (default: True)
    - pool_reset_on_return: What the pool does on release (default: 'rollback')
    """
    pool_size: int = 5
    max_overflow: int = 10
    pool_timeout: float = 30
    pool_recycle: int = 300
    pool_pre_ping: bool = True
    pool_reset_on_return: str | None = 'rollback'

    @classmethod
    def field_names(cls) -> set[str]:
        return {f.name for f in fields(cls)}


def split_config(config: Mapping[str, Any] | None,
                 **kw: Any) -> tuple[dict[str, Any], PoolOptions]:
    """Separate pool options from driver options.

    Args:
        config: Caller configuration mapping
        **kw: Additional keyword arguments overriding config

    Returns
        Tuple of (driver_config, pool_options). driver_config is a new dict.
    """
    merged = dict(config or {})
    merged.update(kw)

    for alias, name in _ALIASES.items():
        if alias in merged:
            merged.setdefault(name, merged.pop(alias))

    names = PoolOptions.field_names()
    pool_kwargs = {key: merged.pop(key) for key in list(merged) if key in names}
    return merged, PoolOptions(**pool_kwargs)
