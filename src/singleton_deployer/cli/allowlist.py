import json
from pathlib import Path

import click
from eth_utils.address import is_address

from singleton_deployer.allowlist import (
    MAX_TOKEN_ID,
    AllowlistEntry,
    build_tree,
    generate_proof,
    load_allowlist,
)
from singleton_deployer.cli import cli
from singleton_deployer.exceptions import AllowlistError
from singleton_deployer.functions import get_checksum_address


def _validate_address(ctx: click.Context, param: click.Parameter, value: str) -> str:
    if not is_address(value):
        msg = f"{value} is not a valid address"
        raise click.BadParameter(msg)
    return get_checksum_address(value)


_allowlist_file = click.argument(
    "allowlist_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)


@cli.group()
def allowlist() -> None:
    """
    Allowlist commitment commands
    """


@allowlist.command("root")
@_allowlist_file
def allowlist_root(allowlist_file: Path) -> None:
    """
    Print the Merkle root committing to every entry of the allowlist snapshot.
    """

    try:
        tree = build_tree(load_allowlist(allowlist_file))
    except AllowlistError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(tree.root.to_0x_hex())


@allowlist.command("proof")
@_allowlist_file
@click.option(
    "--address",
    required=True,
    callback=_validate_address,
    help="Entry address",
)
@click.option(
    "--token-id",
    required=True,
    type=click.IntRange(min=0, max=MAX_TOKEN_ID),
    help="Entry token ID",
)
def allowlist_proof(allowlist_file: Path, address: str, token_id: int) -> None:
    """
    Print the inclusion proof for a single entry as a JSON array of hashes.
    """

    try:
        tree = build_tree(load_allowlist(allowlist_file))
        proof = generate_proof(tree, AllowlistEntry(address=address, token_id=token_id))
    except AllowlistError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(json.dumps([node.to_0x_hex() for node in proof], indent=2))
