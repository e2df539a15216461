from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from eth_typing import ChecksumAddress
from eth_utils.crypto import keccak
from hexbytes import HexBytes

from singleton_deployer.artifacts import load_artifact
from singleton_deployer.constants import MAX_GAS_LIMIT, SINGLETON_FACTORY_ADDRESS, ZERO_SALT
from singleton_deployer.exceptions.base import DeployerError
from singleton_deployer.exceptions.deployment import DeploymentVerificationFailed
from singleton_deployer.functions import build_init_code, derive_deployment_address
from singleton_deployer.ledger import LedgerClient
from singleton_deployer.logging import logger


@dataclass(slots=True, frozen=True)
class Skipped:
    name: str
    address: ChecksumAddress


@dataclass(slots=True, frozen=True)
class Deployed:
    name: str
    address: ChecksumAddress
    tx_hash: HexBytes


@dataclass(slots=True, frozen=True)
class Failed:
    name: str
    reason: str


type DeploymentOutcome = Skipped | Deployed | Failed


def prepare_deployment(
    name: str,
    constructor_args: Sequence[Any],
    *,
    build_dir: Path,
    relay_address: str = SINGLETON_FACTORY_ADDRESS,
    salt: bytes = ZERO_SALT,
) -> tuple[HexBytes, ChecksumAddress]:
    """
    Load the named artifact, bind its constructor arguments, and derive its deployment address.
    """

    artifact = load_artifact(name, build_dir)
    init_code = build_init_code(
        name=artifact.name,
        abi=artifact.abi,
        bytecode=artifact.bytecode,
        constructor_args=constructor_args,
    )
    address = derive_deployment_address(
        relay_address=relay_address,
        salt=salt,
        init_code=init_code,
    )
    logger.debug(f"{name} init code hash {HexBytes(keccak(init_code)).to_0x_hex()}")
    return init_code, address


@dataclass(slots=True, frozen=True)
class DeploymentRequest:
    name: str
    constructor_args: tuple[Any, ...] = ()


class SingletonDeployer:
    """
    Deploy build artifacts through a CREATE2 relay, skipping any whose derived address already holds
    code.

    Artifacts are processed one at a time in the order given. Later contracts may take the address
    of an earlier one as a constructor argument, and all transactions share one signing account,
    so a deployment must confirm before the next artifact is considered.
    """

    def __init__(
        self,
        ledger: LedgerClient,
        build_dir: Path,
        *,
        relay_address: str = SINGLETON_FACTORY_ADDRESS,
        salt: bytes = ZERO_SALT,
        gas_limit: int = MAX_GAS_LIMIT,
    ) -> None:
        self.ledger = ledger
        self.build_dir = build_dir
        self.relay_address = relay_address
        self.salt = HexBytes(salt)
        self.gas_limit = gas_limit
        self.outcomes: list[DeploymentOutcome] = []

    def predict_address(self, name: str, constructor_args: Sequence[Any] = ()) -> ChecksumAddress:
        """
        Return the address the artifact would be deployed to, without touching the ledger.
        """

        _, address = prepare_deployment(
            name,
            constructor_args,
            build_dir=self.build_dir,
            relay_address=self.relay_address,
            salt=self.salt,
        )
        return address

    def deploy(self, name: str, constructor_args: Sequence[Any] = ()) -> Skipped | Deployed:
        logger.info(f"Deploying {name}")

        init_code, address = prepare_deployment(
            name,
            constructor_args,
            build_dir=self.build_dir,
            relay_address=self.relay_address,
            salt=self.salt,
        )

        if self.ledger.has_code(address):
            logger.info(f"Skipping {name} because it has been deployed at {address}")
            return Skipped(name=name, address=address)

        tx_hash = self.ledger.submit_and_confirm(
            init_code=init_code,
            salt=self.salt,
            gas_limit=self.gas_limit,
        )

        if not self.ledger.has_code(address):
            raise DeploymentVerificationFailed(name=name, address=address)

        logger.info(f"Deployed {name} at {address}")
        return Deployed(name=name, address=address, tx_hash=tx_hash)

    def deploy_all(
        self,
        requests: Iterable[DeploymentRequest | tuple[str, Sequence[Any]]],
    ) -> list[DeploymentOutcome]:
        """
        Deploy each request in order, returning one outcome per artifact.

        The first error aborts the run and is re-raised after a `Failed` outcome for the offending
        artifact is appended to `self.outcomes`. Deployments completed before the error remain on
        chain, and a later run will skip them.
        """

        self.outcomes = []
        for request in requests:
            if not isinstance(request, DeploymentRequest):
                name, constructor_args = request
                request = DeploymentRequest(name=name, constructor_args=tuple(constructor_args))

            try:
                outcome = self.deploy(request.name, request.constructor_args)
            except DeployerError as exc:
                self.outcomes.append(Failed(name=request.name, reason=str(exc)))
                raise
            self.outcomes.append(outcome)

        logger.info("Done")
        return list(self.outcomes)
