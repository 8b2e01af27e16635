"""Per-test rollback transactions and row factories for SQLAlchemy test suites."""

from txsandbox.core.accessor import sandbox
from txsandbox.core.config import EnvironmentOptions
from txsandbox.core.database import create_sandbox_engine
from txsandbox.core.exceptions import (
    ConfigurationException,
    DependencyDepthException,
    LifecycleException,
    SandboxException,
)
from txsandbox.core.transaction_context import TransactionContext
from txsandbox.environment import create_environment, setup_environment
from txsandbox.factories import (
    BoundFactory,
    Deferred,
    Factory,
    FactorySet,
    ResolverContext,
    Sequence,
    compose_factory,
    deferred,
    define_factory,
)

__version__ = "0.1.0"

__all__ = [
    "sandbox",
    "setup_environment",
    "create_environment",
    "create_sandbox_engine",
    "EnvironmentOptions",
    "TransactionContext",
    "SandboxException",
    "ConfigurationException",
    "LifecycleException",
    "DependencyDepthException",
    "BoundFactory",
    "Deferred",
    "Factory",
    "FactorySet",
    "ResolverContext",
    "Sequence",
    "compose_factory",
    "deferred",
    "define_factory",
]
