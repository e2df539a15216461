"""
Exceptions raised while reading compiled contract artifacts from the build directory.
"""

from pathlib import Path

from singleton_deployer.exceptions.base import DeployerError


class ArtifactError(DeployerError):
    """
    Base exception for artifact loading errors.
    """


class ArtifactNotFound(ArtifactError):
    """
    Raised when no build output exists for the requested contract name.
    """

    def __init__(self, name: str, path: Path) -> None:
        self.name = name
        self.path = path
        super().__init__(message=f"No build artifact for {name} at {path}.")


class MalformedArtifact(ArtifactError):
    """
    Raised when a build artifact is present but lacks a usable ABI or bytecode.
    """

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(message=f"Malformed build artifact for {name}: {reason}")
