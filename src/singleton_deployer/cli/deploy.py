from pathlib import Path
from typing import TYPE_CHECKING

import click
from eth_account import Account

from singleton_deployer.artifacts import load_artifact
from singleton_deployer.cli import cli
from singleton_deployer.config import Settings
from singleton_deployer.constants import TOKEN_CONTRACT_NAMES
from singleton_deployer.deployer import (
    Deployed,
    DeploymentOutcome,
    DeploymentRequest,
    Failed,
    SingletonDeployer,
    Skipped,
    prepare_deployment,
)
from singleton_deployer.exceptions import ConfigurationError, DeployerError
from singleton_deployer.functions import function_selectors
from singleton_deployer.ledger import Web3LedgerClient, connect


def _format_outcome(outcome: DeploymentOutcome) -> str:
    match outcome:
        case Skipped(name=name, address=address):
            return f"skipped   {name:<24} {address}"
        case Deployed(name=name, address=address, tx_hash=tx_hash):
            return f"deployed  {name:<24} {address} (tx {tx_hash.to_0x_hex()})"
        case Failed(name=name, reason=reason):
            return f"FAILED    {name:<24} {reason}"


@cli.command("deploy")
@click.option(
    "--contract",
    "contract_names",
    multiple=True,
    help="Deploy only the named contract. May be repeated; defaults to the configured list.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Print the derived addresses without connecting to the ledger",
)
@click.pass_obj
def deploy(settings: Settings, contract_names: tuple[str, ...], *, dry_run: bool) -> None:
    """
    Deploy each contract through the relay, skipping contracts that are already deployed.
    """

    names = list(contract_names) or settings.contract_names

    try:
        if dry_run:
            if settings.factory_owner is None:
                raise ConfigurationError(missing=["FACTORY_OWNER"])
            for name in names:
                _, address = prepare_deployment(
                    name,
                    (settings.factory_owner,),
                    build_dir=settings.build_dir,
                    relay_address=settings.relay_address,
                )
                click.echo(f"{name:<24} {address}")
            return

        settings.require_deployment_settings()
        if TYPE_CHECKING:
            assert settings.rpc_url is not None
            assert settings.private_key is not None

        ledger = Web3LedgerClient(
            w3=connect(settings.rpc_url),
            relay_address=settings.relay_address,
            account=Account.from_key(settings.private_key.get_secret_value()),
            receipt_timeout=settings.receipt_timeout,
        )
    except (DeployerError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc

    deployer = SingletonDeployer(
        ledger=ledger,
        build_dir=settings.build_dir,
        relay_address=settings.relay_address,
        gas_limit=settings.max_gas_limit,
    )
    try:
        deployer.deploy_all(
            DeploymentRequest(name=name, constructor_args=(settings.factory_owner,))
            for name in names
        )
    except DeployerError as exc:
        raise click.ClickException(str(exc)) from exc
    finally:
        for outcome in deployer.outcomes:
            click.echo(_format_outcome(outcome))


@cli.command("selectors")
@click.argument("contract_names", nargs=-1)
@click.option(
    "--build-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the compiler output files",
)
@click.pass_obj
def selectors(settings: Settings, contract_names: tuple[str, ...], build_dir: Path | None) -> None:
    """
    Print a selector collision check for each function of the named contracts (default: the token
    implementations).
    """

    for name in contract_names or TOKEN_CONTRACT_NAMES:
        try:
            artifact = load_artifact(name, build_dir or settings.build_dir)
        except DeployerError as exc:
            raise click.ClickException(str(exc)) from exc

        click.echo(name)
        for signature, selector in function_selectors(artifact.abi).items():
            click.echo(f"checkSelectorCollision({selector.to_0x_hex()}); // {signature}")
