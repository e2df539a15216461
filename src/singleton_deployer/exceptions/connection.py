"""
Connection-related exceptions.

The deployer never retries a failed ledger query; these exceptions abort the run.
"""

from singleton_deployer.exceptions.base import DeployerError


class RpcUnavailable(DeployerError):
    """
    Raised when a query to the remote ledger cannot complete.
    """

    def __init__(self, operation: str, error: str) -> None:
        """
        Args:
            operation: The ledger operation that failed (e.g. "eth_getCode")
            error: A description of the underlying transport failure
        """
        self.operation = operation
        self.error = error
        super().__init__(message=f"RPC unavailable during {operation}: {error}")
