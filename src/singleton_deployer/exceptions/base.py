from typing import Any


class DeployerError(Exception):
    """
    Base exception used as the parent class for all exceptions raised by this package.

    Calling code should catch `DeployerError` and derived classes separately before general
    exceptions, e.g.:

    ```
    try:
        singleton_deployer.some_function()
    except SpecificDeployerError:
        ... # handle a specific exception
    except DeployerError:
        ... # handle non-specific exception from this package
    except Exception:
        ... # handle exceptions raised by 3rd party dependencies or Python built-ins
    ```

    An optional string-formatted message may be attached to the exception and retrieved by accessing
    the `.message` attribute.
    """

    message: str | None = None

    def __init__(self, message: str | None = None) -> None:
        if message:
            self.message = message
            super().__init__(message)

    def __reduce__(self) -> tuple[Any, ...]:
        # Subclasses take differing __init__ arguments, so rebuild without calling __init__
        return _rebuild_exception, (self.__class__, self.args, dict(self.__dict__))


class DeployerValueError(DeployerError): ...


class DeployerTypeError(DeployerError): ...


def _rebuild_exception(
    cls: type[DeployerError],
    args: tuple[Any, ...],
    state: dict[str, Any],
) -> DeployerError:
    exc = cls.__new__(cls)
    exc.args = args
    exc.__dict__.update(state)
    return exc
