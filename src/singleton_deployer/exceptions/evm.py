from singleton_deployer.exceptions.base import DeployerValueError


class InvalidInputLength(DeployerValueError):
    """
    Raised when a fixed-width value (address, salt, hash) has the wrong length.
    """

    def __init__(self, field: str, expected: int, actual: int) -> None:
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(message=f"{field} must be {expected} bytes, got {actual}")
