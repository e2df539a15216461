from eth_typing import ChecksumAddress
from hexbytes import HexBytes

from singleton_deployer.exceptions.base import DeployerError

"""
Exceptions defined here are raised by the deployment orchestrator and the ledger client.
"""


class DeploymentError(DeployerError):
    """
    Exception raised while deploying an artifact.
    """


class ConstructorArgumentError(DeploymentError):
    def __init__(self, name: str, reason: str) -> None:
        """
        The constructor arguments could not be ABI-encoded against the artifact's constructor.
        """
        self.name = name
        self.reason = reason
        super().__init__(message=f"Cannot encode constructor arguments for {name}: {reason}")


class DeploymentVerificationFailed(DeploymentError):
    def __init__(self, name: str, address: ChecksumAddress) -> None:
        """
        The deployment transaction confirmed, but no code exists at the derived address.
        """
        self.name = name
        self.address = address
        super().__init__(message=f"failed to deploy {name}: no code at {address}")


class TransactionReverted(DeploymentError):
    def __init__(self, tx_hash: HexBytes) -> None:
        self.tx_hash = tx_hash
        super().__init__(message=f"Deployment transaction {tx_hash.to_0x_hex()} reverted.")
