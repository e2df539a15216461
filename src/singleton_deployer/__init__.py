from .config import Settings, load_config_from_file
from .logging import logger
from .version import __version__

# isort: split

from .allowlist import (
    AllowlistEntry,
    CommitmentTree,
    build_tree,
    generate_proof,
    get_leaf,
    load_allowlist,
    verify_proof,
)
from .artifacts import ContractArtifact, load_artifact
from .deployer import (
    Deployed,
    DeploymentOutcome,
    DeploymentRequest,
    Failed,
    SingletonDeployer,
    Skipped,
    prepare_deployment,
)
from .functions import build_init_code, create2_address, derive_deployment_address
from .ledger import LedgerClient, Web3LedgerClient, connect

__all__ = (
    "AllowlistEntry",
    "CommitmentTree",
    "ContractArtifact",
    "Deployed",
    "DeploymentOutcome",
    "DeploymentRequest",
    "Failed",
    "LedgerClient",
    "Settings",
    "SingletonDeployer",
    "Skipped",
    "Web3LedgerClient",
    "__version__",
    "build_init_code",
    "build_tree",
    "connect",
    "constants",
    "create2_address",
    "derive_deployment_address",
    "exceptions",
    "functions",
    "generate_proof",
    "get_leaf",
    "load_allowlist",
    "load_artifact",
    "load_config_from_file",
    "logger",
    "prepare_deployment",
    "verify_proof",
)
