from txsandbox.core.accessor import SandboxAccessor, sandbox
from txsandbox.core.config import EnvironmentOptions, Settings, settings
from txsandbox.core.database import DatabaseHolder, create_sandbox_engine
from txsandbox.core.transaction_context import ContextState, TransactionContext

__all__ = [
    "SandboxAccessor",
    "sandbox",
    "EnvironmentOptions",
    "Settings",
    "settings",
    "DatabaseHolder",
    "create_sandbox_engine",
    "ContextState",
    "TransactionContext",
]
