__all__ = (
    "DEFAULT_BUILD_DIR",
    "DEPLOYABLE_CONTRACT_NAMES",
    "MAX_GAS_LIMIT",
    "SINGLETON_FACTORY_ABI",
    "SINGLETON_FACTORY_ADDRESS",
    "TOKEN_CONTRACT_NAMES",
    "ZERO_SALT",
)

from pathlib import Path
from typing import Any

from eth_typing import ChecksumAddress
from hexbytes import HexBytes

from singleton_deployer.functions import get_checksum_address

DEFAULT_BUILD_DIR = Path("build")

# Gas ceiling attached to every relay deployment transaction
MAX_GAS_LIMIT = 6_000_000

# Every artifact is deployed with the same salt, so the address depends only on the init code
ZERO_SALT = HexBytes(b"\x00" * 32)

# EIP-2470 singleton factory
SINGLETON_FACTORY_ADDRESS: ChecksumAddress = get_checksum_address(
    "0xce0042B868300000d44A59004Da54A005ffdcf9f"
)
SINGLETON_FACTORY_ABI: list[dict[str, Any]] = [
    {
        "constant": False,
        "inputs": [
            {"internalType": "bytes", "name": "_initCode", "type": "bytes"},
            {"internalType": "bytes32", "name": "_salt", "type": "bytes32"},
        ],
        "name": "deploy",
        "outputs": [
            {"internalType": "address payable", "name": "createdContract", "type": "address"},
        ],
        "payable": False,
        "stateMutability": "nonpayable",
        "type": "function",
    }
]

# Contracts deployed through the relay, in dependency order
DEPLOYABLE_CONTRACT_NAMES: tuple[str, ...] = (
    "ERC20ItemsFactory",
    "ERC721ItemsFactory",
    "ERC721CItemsFactory",
    "ERC721SaleFactory",
    "ERC1155ItemsFactory",
    "ERC1155SaleFactory",
    "PaymentCombiner",
)

# Implementations created by the factories above, not deployed directly
TOKEN_CONTRACT_NAMES: tuple[str, ...] = (
    "ERC20Items",
    "ERC721Items",
    "ERC721CItems",
    "ERC721Sale",
    "ERC1155Items",
    "ERC1155Sale",
)
