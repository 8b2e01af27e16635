# Database defaults
DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
POSTGRES_SYNC_PREFIX = "postgresql://"
POSTGRES_ASYNC_PREFIX = "postgresql+asyncpg://"

# Factory sequences start here unless configured otherwise
DEFAULT_SEQUENCE_START = 1

# Nested use() calls deeper than this are treated as runaway recursion
DEFAULT_MAX_DEPENDENCY_DEPTH = 16

# Settings
ENV_PREFIX = "TXSANDBOX_"
DEFAULT_LOG_LEVEL = "INFO"

ACCESSOR_WARNING = (
    "sandbox.client should be used in tests or fixtures because the transaction has not yet started."
)
