import tomllib
from pathlib import Path
from typing import Annotated, Any

from eth_utils.address import is_address
from pydantic import Field, PlainSerializer, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from singleton_deployer.constants import (
    DEFAULT_BUILD_DIR,
    DEPLOYABLE_CONTRACT_NAMES,
    MAX_GAS_LIMIT,
    SINGLETON_FACTORY_ADDRESS,
)
from singleton_deployer.exceptions.config import ConfigurationError
from singleton_deployer.functions import get_checksum_address


class Settings(BaseSettings):
    """
    Deployment settings, read from environment variables (`RPC_URL`, `PRIVATE_KEY`,
    `FACTORY_OWNER`, ...) and an optional `.env` file in the working directory.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    rpc_url: str | None = None
    private_key: SecretStr | None = None
    factory_owner: str | None = None
    relay_address: str = SINGLETON_FACTORY_ADDRESS
    # Serialize the path as a string representation of the absolute path
    build_dir: Annotated[
        Path,
        PlainSerializer(lambda path: str(path.absolute()), return_type=str),
    ] = DEFAULT_BUILD_DIR
    max_gas_limit: int = Field(default=MAX_GAS_LIMIT, gt=0)
    receipt_timeout: float = Field(default=600.0, gt=0)
    contract_names: list[str] = Field(default_factory=lambda: list(DEPLOYABLE_CONTRACT_NAMES))

    @field_validator("factory_owner", "relay_address", mode="after")
    @classmethod
    def validate_addresses(cls, address: str | None) -> str | None:
        if address is None:
            return None
        if not is_address(address):
            msg = f"{address} is not a valid address"
            raise ValueError(msg)
        return get_checksum_address(address)

    def require_deployment_settings(self) -> None:
        """
        Check that everything needed to submit transactions is present.
        """

        missing = [
            env_name
            for env_name, value in (
                ("PRIVATE_KEY", self.private_key),
                ("RPC_URL", self.rpc_url),
                ("FACTORY_OWNER", self.factory_owner),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(missing=missing)

    def dump(self) -> dict[str, Any]:
        """
        A serializable view of the settings, with the private key masked and unset values omitted.
        """

        return self.model_dump(mode="json", exclude_none=True)


def load_config_from_file(config_path: Path) -> Settings:
    return Settings.model_validate(
        tomllib.loads(
            config_path.read_text(),
        ),
    )

