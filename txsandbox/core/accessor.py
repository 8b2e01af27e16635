from typing import Any

import structlog

from txsandbox.core.constants import ACCESSOR_WARNING
from txsandbox.core.exceptions import ConfigurationException
from txsandbox.core.transaction_context import TransactionContext

logger = structlog.get_logger(__name__)


class SandboxAccessor:
    """
    Process-wide view of the running test's transaction.

    ``client`` is resolved on every read. Outside a test it logs a warning and
    returns None instead of raising, so module-level reads do not break
    collection; using that None fails at the call site.
    """

    def __init__(self):
        self._context: TransactionContext | None = None

    @property
    def context(self) -> TransactionContext | None:
        return self._context

    @property
    def client(self) -> Any:
        transaction = self._context.get_current_transaction() if self._context else None
        if transaction is None:
            logger.warning("transaction_accessed_outside_test", detail=ACCESSOR_WARNING)
        return transaction

    def install(self, context: TransactionContext) -> None:
        """
        Point the accessor at a context.

        :raises ConfigurationException: If a different context is already installed
        """
        if self._context is not None and self._context is not context:
            raise ConfigurationException(
                "A sandbox environment is already configured for this process",
                error_code="ENVIRONMENT_ALREADY_CONFIGURED",
            )
        self._context = context

    def uninstall(self) -> None:
        self._context = None


sandbox = SandboxAccessor()
