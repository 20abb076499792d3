"""Built-in GraphQL scalars and the Python types they map to.

Every type registry is seeded from a mapping like ``BUILTIN_SCALARS``
before any schema-derived type is added. Pass a different mapping to the
compiler to map extra scalars to native types:

    known = extend_known_types(BUILTIN_SCALARS, {"DateTime": datetime})
    registry = TypeCompiler(known).compile(schema)
"""

from types import MappingProxyType
from typing import Mapping

BUILTIN_SCALARS: Mapping[str, type] = MappingProxyType({
    "Int": int,
    "Float": float,
    "String": str,
    "Boolean": bool,
    "ID": str,
})


def extend_known_types(
    base: Mapping[str, type], extra: Mapping[str, type]
) -> Mapping[str, type]:
    """Return a new read-only mapping with ``extra`` layered over ``base``."""
    merged = dict(base)
    merged.update(extra)
    return MappingProxyType(merged)
