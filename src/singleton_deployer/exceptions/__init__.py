from singleton_deployer.exceptions.allowlist import (
    AllowlistError,
    EmptyAllowlist,
    EntryNotFound,
    InvalidAllowlistEntry,
    InvalidAllowlistFile,
)
from singleton_deployer.exceptions.artifact import ArtifactError, ArtifactNotFound, MalformedArtifact
from singleton_deployer.exceptions.base import DeployerError, DeployerTypeError, DeployerValueError
from singleton_deployer.exceptions.config import ConfigurationError
from singleton_deployer.exceptions.connection import RpcUnavailable
from singleton_deployer.exceptions.deployment import (
    ConstructorArgumentError,
    DeploymentError,
    DeploymentVerificationFailed,
    TransactionReverted,
)
from singleton_deployer.exceptions.evm import InvalidInputLength

from . import allowlist, artifact, config, connection, deployment, evm

__all__ = (
    "AllowlistError",
    "ArtifactError",
    "ArtifactNotFound",
    "ConfigurationError",
    "ConstructorArgumentError",
    "DeployerError",
    "DeployerTypeError",
    "DeployerValueError",
    "DeploymentError",
    "DeploymentVerificationFailed",
    "EmptyAllowlist",
    "EntryNotFound",
    "InvalidAllowlistEntry",
    "InvalidAllowlistFile",
    "InvalidInputLength",
    "MalformedArtifact",
    "RpcUnavailable",
    "TransactionReverted",
    "allowlist",
    "artifact",
    "config",
    "connection",
    "deployment",
    "evm",
)
