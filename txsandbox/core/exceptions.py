"""
Sandbox exceptions for configuration and lifecycle violations.

These exceptions are raised by the transaction context and the factory layer.
Errors coming from the database driver are never wrapped: they propagate
unchanged so the failing test shows the real cause.
"""


class SandboxException(Exception):
    """Base exception for all sandbox errors."""

    def __init__(self, message: str, error_code: str):
        super().__init__(message)
        self.message = message
        self.error_code = error_code


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigurationException(SandboxException):
    """Environment or factory configuration is invalid."""

    def __init__(self, message: str, error_code: str = "CONFIGURATION_ERROR"):
        super().__init__(message=message, error_code=error_code)


class MissingClientException(ConfigurationException):
    """No client factory was configured."""

    def __init__(self):
        super().__init__(
            message="The 'client' option is required: pass a zero-argument callable returning the database handle",
            error_code="MISSING_CLIENT",
        )


class InvalidClientException(ConfigurationException):
    """Client factory returned something that cannot open transactions."""

    def __init__(self, handle: object):
        super().__init__(
            message=f"Client factory returned {type(handle).__name__}, expected an AsyncEngine "
            "or a TransactionClientInterface",
            error_code="INVALID_CLIENT",
        )


class UnknownTableException(ConfigurationException):
    """Factory refers to a table missing from its schema."""

    def __init__(self, table: str, available: list[str] | None = None):
        message = f"Table '{table}' not found in schema"
        if available:
            message += f" (available: {', '.join(sorted(available))})"
        super().__init__(message=message, error_code="UNKNOWN_TABLE")


class InvalidOverrideException(ConfigurationException):
    """Override passed to create() has an unsupported shape."""

    def __init__(self, message: str):
        super().__init__(message=message, error_code="INVALID_OVERRIDE")


# ============================================================================
# Lifecycle Exceptions
# ============================================================================


class LifecycleException(SandboxException):
    """Transaction lifecycle steps were called out of order."""

    def __init__(self, message: str, error_code: str = "LIFECYCLE_ERROR"):
        super().__init__(message=message, error_code=error_code)


class EnvironmentNotInitializedException(LifecycleException):
    """A transaction was requested before setup() ran."""

    def __init__(self):
        super().__init__(
            message="Environment not initialized. Call setup() first.",
            error_code="ENVIRONMENT_NOT_INITIALIZED",
        )


class TransactionAlreadyActiveException(LifecycleException):
    """begin_transaction() was called while a transaction is still open."""

    def __init__(self):
        super().__init__(
            message="A transaction is already active; the previous test was not rolled back",
            error_code="TRANSACTION_ALREADY_ACTIVE",
        )


class NoActiveTransactionException(LifecycleException):
    """rollback_transaction() was called with no open transaction."""

    def __init__(self):
        super().__init__(
            message="No active transaction to roll back",
            error_code="NO_ACTIVE_TRANSACTION",
        )


# ============================================================================
# Factory Exceptions
# ============================================================================


class DependencyDepthException(SandboxException):
    """Nested use() calls went deeper than the configured limit, usually a cycle."""

    def __init__(self, chain: tuple[str, ...], max_depth: int):
        self.chain = chain
        self.max_depth = max_depth
        super().__init__(
            message=f"Factory dependency chain exceeds {max_depth} levels: {' -> '.join(chain)}",
            error_code="DEPENDENCY_DEPTH_EXCEEDED",
        )
