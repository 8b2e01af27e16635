from collections.abc import Mapping
from typing import Callable, Iterator

from txsandbox.core.exceptions import ConfigurationException
from txsandbox.factories.factory import BoundFactory, Factory
from txsandbox.interfaces.transaction_client import TransactionInterface


class FactorySet:
    """
    Bound factories of one transaction, reachable as attributes and by key.

    Not a Mapping subclass: a table called ``items`` or ``keys`` must resolve
    to its factory, so the only methods here are dunders.
    """

    def __init__(self, factories: dict[str, BoundFactory]):
        self._factories = factories
        for name, bound in factories.items():
            setattr(self, name, bound)

    def __getitem__(self, name: str) -> BoundFactory:
        return self._factories[name]

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(self._factories)

    def __len__(self) -> int:
        return len(self._factories)

    def __getattr__(self, name: str) -> BoundFactory:
        # Only reached when the name is not a bound factory
        raise AttributeError(f"No factory named '{name}'")

    def __repr__(self):
        return f"<FactorySet ({', '.join(self._factories)})>"


def compose_factory(factories: Mapping[str, Factory]) -> Callable[[TransactionInterface], FactorySet]:
    """
    Group factories under names and bind them together.

    The returned function binds every factory to the given transaction and
    builds a new FactorySet on each call, so a set never outlives its test.
    :raises ConfigurationException: If a value is not a factory or a name starts with an underscore
    """
    definitions = dict(factories)
    for name, definition in definitions.items():
        if not isinstance(name, str) or name.startswith("_"):
            raise ConfigurationException(f"Factory name {name!r} must be a string not starting with '_'")
        if not isinstance(definition, Factory):
            raise ConfigurationException(f"'{name}' is not a factory (got {type(definition).__name__})")

    def bind(transaction: TransactionInterface) -> FactorySet:
        return FactorySet({name: definition(transaction) for name, definition in definitions.items()})

    return bind
