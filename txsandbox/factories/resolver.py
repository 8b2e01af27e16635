"""
Resolver engine: turns a resolver plus overrides into concrete rows.

A resolver is a plain function ``(context) -> fields``. Field values are
either literals or :class:`Deferred` callables. Overrides are merged on top of
the resolver output first, so a deferred value replaced by an override is
never evaluated and any dependency it would have created is never inserted.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Union

from txsandbox.core.exceptions import ConfigurationException, InvalidOverrideException
from txsandbox.factories.deferred import Deferred

if TYPE_CHECKING:
    from txsandbox.factories.factory import BoundFactory, Factory

Fields = Mapping[str, Any]
Override = Union[None, int, Fields, Sequence[Fields]]
Resolver = Callable[["ResolverContext"], Fields]


@dataclass(frozen=True)
class ResolverContext:
    """What a resolver gets to work with for one row."""

    sequence: int
    use: Callable[["Factory"], "BoundFactory"]


def parse_override(override: Override) -> tuple[list[Fields], bool]:
    """
    Normalize the three override shapes into one override per row.

    :param override: None, a count, a mapping, or a list of mappings
    :return: Per-row overrides and whether the caller expects a list back
    :raises InvalidOverrideException: If the shape is not supported
    """
    if override is None:
        return [{}], False

    # bool is an int subclass; create(True) is almost certainly a mistake
    if isinstance(override, bool):
        raise InvalidOverrideException("create() does not accept a boolean override")

    if isinstance(override, int):
        if override < 0:
            raise InvalidOverrideException(f"Row count must not be negative, got {override}")
        return [{} for _ in range(override)], True

    if isinstance(override, Mapping):
        return [override], False

    if isinstance(override, (list, tuple)):
        for position, item in enumerate(override):
            if not isinstance(item, Mapping):
                raise InvalidOverrideException(
                    f"Override at position {position} must be a mapping, got {type(item).__name__}"
                )
        return list(override), True

    raise InvalidOverrideException(f"Unsupported override type: {type(override).__name__}")


async def resolve_fields(fields: Fields) -> dict[str, Any]:
    """Evaluate deferred values in field order; literals pass through."""
    resolved = {}
    for key, value in fields.items():
        resolved[key] = await value.resolve() if isinstance(value, Deferred) else value
    return resolved


async def resolve_row(resolver: Resolver, context: ResolverContext, override: Fields) -> dict[str, Any]:
    """
    Build one row: run the resolver, apply the override, then resolve what is left.

    :param resolver: Table resolver function
    :param context: Sequence value and use() capability for this row
    :param override: Caller-supplied fields, winning on key conflicts
    :return: Fully resolved column values
    """
    defaults = resolver(context)
    if not isinstance(defaults, Mapping):
        raise ConfigurationException(
            f"Resolver must return a mapping of field values, got {type(defaults).__name__}"
        )

    return await resolve_fields({**defaults, **override})
