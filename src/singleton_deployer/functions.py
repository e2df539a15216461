import functools
from collections.abc import Sequence
from typing import Any

import eth_abi.abi
from cchecksum import to_checksum_address
from eth_abi.exceptions import EncodingError
from eth_typing import ChecksumAddress, HexStr
from eth_utils.abi import collapse_if_tuple
from eth_utils.crypto import keccak
from hexbytes import HexBytes

from singleton_deployer.exceptions.deployment import ConstructorArgumentError
from singleton_deployer.exceptions.evm import InvalidInputLength

ADDRESS_LENGTH = 20
SALT_LENGTH = 32
HASH_LENGTH = 32


@functools.lru_cache(maxsize=512)
def get_checksum_address(address: HexStr | bytes) -> ChecksumAddress:
    return to_checksum_address(address)


def create2_address(
    deployer: str | bytes,
    salt: bytes | str,
    init_code_hash: bytes | str,
) -> ChecksumAddress:
    """
    Generate the deterministic CREATE2 address for a given deployer, salt, and the keccak hash of
    the contract creation (init) bytecode.

    References:
        - https://eips.ethereum.org/EIPS/eip-1014
        - https://docs.openzeppelin.com/cli/2.8/deploying-with-create2
    """
    return get_checksum_address(
        keccak(HexBytes(0xFF) + HexBytes(deployer) + HexBytes(salt) + HexBytes(init_code_hash))[
            -20:
        ],  # Contract address is the least significant 20 bytes from the 32 byte hash
    )


def derive_deployment_address(
    relay_address: str | bytes,
    salt: bytes | str,
    init_code: bytes | str,
) -> ChecksumAddress:
    """
    Derive the address that the relay will deploy `init_code` to when called with `salt`.

    The result depends only on the three inputs, never on the nonce of the account submitting the
    deployment, so the same artifact and constructor arguments always map to the same address.
    """

    relay_bytes = HexBytes(relay_address)
    salt_bytes = HexBytes(salt)

    if len(relay_bytes) != ADDRESS_LENGTH:
        raise InvalidInputLength(
            field="relay address", expected=ADDRESS_LENGTH, actual=len(relay_bytes)
        )
    if len(salt_bytes) != SALT_LENGTH:
        raise InvalidInputLength(field="salt", expected=SALT_LENGTH, actual=len(salt_bytes))

    return create2_address(
        deployer=relay_bytes,
        salt=salt_bytes,
        init_code_hash=keccak(HexBytes(init_code)),
    )


def _constructor_argument_types(abi: Sequence[dict[str, Any]]) -> list[str]:
    for entry in abi:
        if entry.get("type") == "constructor":
            return [collapse_if_tuple(dict(arg)) for arg in entry.get("inputs", [])]
    return []


def build_init_code(
    name: str,
    abi: Sequence[dict[str, Any]],
    bytecode: bytes,
    constructor_args: Sequence[Any] | None = None,
) -> HexBytes:
    """
    Build the contract creation code: the artifact bytecode followed by the ABI-encoded constructor
    arguments.
    """

    if constructor_args is None:
        constructor_args = ()

    argument_types = _constructor_argument_types(abi)
    if len(argument_types) != len(constructor_args):
        raise ConstructorArgumentError(
            name=name,
            reason=f"expected {len(argument_types)} arguments, got {len(constructor_args)}",
        )

    if not argument_types:
        return HexBytes(bytecode)

    try:
        encoded_args = eth_abi.abi.encode(types=argument_types, args=list(constructor_args))
    except (EncodingError, TypeError, ValueError) as exc:
        raise ConstructorArgumentError(name=name, reason=str(exc)) from exc

    return HexBytes(bytecode) + encoded_args


def function_selectors(abi: Sequence[dict[str, Any]]) -> dict[str, HexBytes]:
    """
    Map each function signature in the ABI to its 4-byte selector, e.g.
    {'transfer(address,uint256)': HexBytes('0xa9059cbb')}
    """

    selectors: dict[str, HexBytes] = {}
    for entry in abi:
        if entry.get("type") != "function":
            continue
        argument_types = ",".join(collapse_if_tuple(dict(arg)) for arg in entry.get("inputs", []))
        signature = f"{entry['name']}({argument_types})"
        selectors[signature] = HexBytes(keccak(text=signature)[:4])
    return selectors
