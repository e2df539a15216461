from typing import Any

from singleton_deployer.exceptions.base import DeployerError


class AllowlistError(DeployerError):
    """
    Exception raised inside the allowlist commitment helpers.
    """


class EmptyAllowlist(AllowlistError):
    def __init__(self) -> None:
        super().__init__(message="Cannot build a commitment tree without entries.")


class EntryNotFound(AllowlistError):
    """
    The entry's leaf commitment is not part of the tree.
    """

    def __init__(self, leaf: str) -> None:
        self.leaf = leaf
        super().__init__(message=f"Leaf {leaf} is not in the tree.")


class InvalidAllowlistEntry(AllowlistError):
    """
    The entry values cannot be packed into a leaf commitment.
    """

    def __init__(self, values: tuple[Any, ...], reason: str) -> None:
        self.values = values
        self.reason = reason
        super().__init__(message=f"Cannot encode allowlist entry {values}: {reason}")


class InvalidAllowlistFile(AllowlistError): ...
