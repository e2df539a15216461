from pathlib import Path
from typing import Protocol
from urllib.parse import urlparse

import tenacity
from eth_account.signers.local import LocalAccount
from eth_typing import ChecksumAddress
from hexbytes import HexBytes
from requests.exceptions import RequestException
from web3 import HTTPProvider, IPCProvider, LegacyWebSocketProvider, Web3
from web3.exceptions import Web3Exception

from singleton_deployer.constants import SINGLETON_FACTORY_ABI
from singleton_deployer.exceptions.connection import RpcUnavailable
from singleton_deployer.exceptions.deployment import TransactionReverted
from singleton_deployer.functions import get_checksum_address
from singleton_deployer.logging import logger

_TRANSPORT_ERRORS = (Web3Exception, RequestException, OSError)


class LedgerClient(Protocol):
    """
    The two ledger operations used by the deployer. Implementations must raise `RpcUnavailable`
    when a query cannot complete.
    """

    def has_code(self, address: ChecksumAddress) -> bool: ...

    def submit_and_confirm(self, init_code: bytes, salt: bytes, gas_limit: int) -> HexBytes: ...


class Web3LedgerClient:
    """
    Ledger client backed by a `Web3` connection. Deployment transactions are sent to the relay's
    `deploy(bytes,bytes32)` function, signed locally by `account`.
    """

    def __init__(
        self,
        w3: Web3,
        relay_address: str,
        account: LocalAccount,
        *,
        receipt_timeout: float = 600.0,
    ) -> None:
        self.w3 = w3
        self.account = account
        self.receipt_timeout = receipt_timeout
        self.relay = w3.eth.contract(
            address=get_checksum_address(relay_address),
            abi=SINGLETON_FACTORY_ABI,
        )

    def has_code(self, address: ChecksumAddress) -> bool:
        try:
            code = self.w3.eth.get_code(address)
        except _TRANSPORT_ERRORS as exc:
            raise RpcUnavailable(operation="eth_getCode", error=str(exc)) from exc
        return len(code) > 0

    def submit_and_confirm(self, init_code: bytes, salt: bytes, gas_limit: int) -> HexBytes:
        try:
            transaction = self.relay.functions.deploy(init_code, salt).build_transaction(
                {
                    "from": self.account.address,
                    "gas": gas_limit,
                    "nonce": self.w3.eth.get_transaction_count(self.account.address, "pending"),
                }
            )
            signed_transaction = self.account.sign_transaction(transaction)
            tx_hash = HexBytes(self.w3.eth.send_raw_transaction(signed_transaction.raw_transaction))
            logger.debug(f"Submitted deployment transaction {tx_hash.to_0x_hex()}")
            receipt = self.w3.eth.wait_for_transaction_receipt(
                tx_hash,
                timeout=self.receipt_timeout,
            )
        except _TRANSPORT_ERRORS as exc:
            raise RpcUnavailable(operation="deploy", error=str(exc)) from exc

        if receipt["status"] == 0:
            raise TransactionReverted(tx_hash=tx_hash)

        return tx_hash


def connect(rpc_url: str, *, timeout: float = 10.0) -> Web3:
    """
    Build a `Web3` instance for an HTTP, WebSocket, or IPC endpoint and wait until it reports a
    live connection.
    """

    match urlparse(rpc_url).scheme:
        case "http" | "https":
            w3 = Web3(HTTPProvider(rpc_url))
        case "ws" | "wss":
            w3 = Web3(LegacyWebSocketProvider(rpc_url))
        case _:
            w3 = Web3(IPCProvider(str(Path(rpc_url).expanduser().absolute())))

    w3_connected_check_with_retry = tenacity.Retrying(
        stop=tenacity.stop_after_delay(timeout),
        wait=tenacity.wait_exponential_jitter(),
        retry=tenacity.retry_if_result(lambda result: result is False),
    )
    try:
        w3_connected_check_with_retry(fn=w3.is_connected)
    except tenacity.RetryError as exc:
        raise RpcUnavailable(operation="connect", error=f"{rpc_url} is not connected") from exc

    return w3
