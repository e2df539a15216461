from singleton_deployer.exceptions.base import DeployerError


class ConfigurationError(DeployerError):
    """
    Raised when a required setting is missing or invalid.
    """

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(message=f"Environment vars not set: {', '.join(missing)}")
