import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from eth_typing import ChecksumAddress
from hexbytes import HexBytes

from singleton_deployer.constants import SINGLETON_FACTORY_ADDRESS
from singleton_deployer.exceptions import RpcUnavailable
from singleton_deployer.functions import derive_deployment_address
from singleton_deployer.logging import logger

FACTORY_OWNER = "0x000000000000000000000000000000000000dEaD"

# Creation code for a contract with an empty runtime, followed by a unique suffix per artifact
CREATION_CODE_PREFIX = "0x6080604052348015600f57600080fd5b50603f80601d6000396000f3fe"

OWNABLE_ABI: list[dict[str, Any]] = [
    {
        "type": "constructor",
        "inputs": [{"name": "owner", "type": "address", "internalType": "address"}],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "owner",
        "inputs": [],
        "outputs": [{"name": "", "type": "address", "internalType": "address"}],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "transferOwnership",
        "inputs": [{"name": "newOwner", "type": "address", "internalType": "address"}],
        "outputs": [],
        "stateMutability": "nonpayable",
    },
]


@pytest.fixture(scope="session", autouse=True)
def _set_deployer_logging():
    """
    Set the logging level to DEBUG for the test run
    """
    logger.setLevel(logging.DEBUG)


def write_artifact(
    build_dir: Path,
    name: str,
    abi: list[dict[str, Any]] | None = None,
    bytecode: str | None = None,
) -> Path:
    if abi is None:
        abi = OWNABLE_ABI
    if bytecode is None:
        bytecode = CREATION_CODE_PREFIX + name.encode().hex()

    path = build_dir / f"{name}.json"
    path.write_text(
        json.dumps(
            {
                "abi": abi,
                "bytecode": {"object": bytecode, "linkReferences": {}},
                "deployedBytecode": {"object": "0x"},
                "methodIdentifiers": {},
            }
        )
    )
    return path


@pytest.fixture
def build_dir(tmp_path: Path) -> Path:
    """
    A build directory holding three ownable contract artifacts: Alpha, Beta, Gamma.
    """

    build_dir = tmp_path / "build"
    build_dir.mkdir()
    for name in ("Alpha", "Beta", "Gamma"):
        write_artifact(build_dir, name)
    return build_dir


@pytest.fixture
def artifact_writer(build_dir: Path) -> Callable[..., Path]:
    def _write(name: str, **kwargs: Any) -> Path:
        return write_artifact(build_dir, name, **kwargs)

    return _write


class FakeLedger:
    """
    An in-memory ledger. Deployments through the relay place code at the CREATE2 address, and every
    call is recorded so tests can check which transactions were submitted.
    """

    def __init__(self, relay_address: str = SINGLETON_FACTORY_ADDRESS) -> None:
        self.relay_address = relay_address
        self.code: dict[ChecksumAddress, bytes] = {}
        self.submissions: list[dict[str, Any]] = []
        self.code_queries: list[ChecksumAddress] = []

        # Failure injection
        self.deployments_leave_no_code = False
        self.unavailable_after_queries: int | None = None

    def has_code(self, address: ChecksumAddress) -> bool:
        if (
            self.unavailable_after_queries is not None
            and len(self.code_queries) >= self.unavailable_after_queries
        ):
            raise RpcUnavailable(operation="eth_getCode", error="connection refused")
        self.code_queries.append(address)
        return len(self.code.get(address, b"")) > 0

    def submit_and_confirm(self, init_code: bytes, salt: bytes, gas_limit: int) -> HexBytes:
        self.submissions.append(
            {
                "init_code": HexBytes(init_code),
                "salt": HexBytes(salt),
                "gas_limit": gas_limit,
            }
        )
        if not self.deployments_leave_no_code:
            address = derive_deployment_address(self.relay_address, salt, init_code)
            self.code[address] = b"\x60\x00"
        return HexBytes(len(self.submissions).to_bytes(32, "big"))


@pytest.fixture
def fake_ledger() -> FakeLedger:
    return FakeLedger()


DEPLOYMENT_ENV_VARS = (
    "RPC_URL",
    "PRIVATE_KEY",
    "FACTORY_OWNER",
    "RELAY_ADDRESS",
    "BUILD_DIR",
    "MAX_GAS_LIMIT",
    "RECEIPT_TIMEOUT",
    "CONTRACT_NAMES",
)


@pytest.fixture
def clean_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """
    Run the test from an empty directory, without any deployment variables in the environment
    """
    monkeypatch.chdir(tmp_path)
    for name in DEPLOYMENT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
