from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pydantic
from hexbytes import HexBytes

from singleton_deployer.exceptions.artifact import ArtifactNotFound, MalformedArtifact
from singleton_deployer.logging import logger


class _BytecodeObject(pydantic.BaseModel):
    object: str


class _CompilerOutput(pydantic.BaseModel):
    """
    The subset of a Forge compiler output file needed for deployment. Other keys (metadata,
    deployedBytecode, methodIdentifiers, ...) are ignored.
    """

    abi: list[dict[str, Any]]
    bytecode: _BytecodeObject


@dataclass(slots=True, frozen=True)
class ContractArtifact:
    name: str
    abi: list[dict[str, Any]]
    bytecode: HexBytes


def artifact_path(name: str, build_dir: Path) -> Path:
    return build_dir / f"{name}.json"


def load_artifact(name: str, build_dir: Path) -> ContractArtifact:
    """
    Load the ABI and creation bytecode for the named contract from the build directory.
    """

    path = artifact_path(name, build_dir)
    try:
        raw = path.read_bytes()
    except FileNotFoundError:
        raise ArtifactNotFound(name=name, path=path) from None
    except OSError as exc:
        raise MalformedArtifact(name=name, reason=f"cannot read {path}: {exc.strerror}") from exc

    try:
        compiler_output = _CompilerOutput.model_validate_json(raw)
    except pydantic.ValidationError as exc:
        missing = sorted({".".join(str(loc) for loc in error["loc"]) for error in exc.errors()})
        raise MalformedArtifact(
            name=name,
            reason=f"invalid or missing field(s): {', '.join(missing) or 'document'}",
        ) from exc

    try:
        bytecode = HexBytes(compiler_output.bytecode.object)
    except ValueError as exc:
        raise MalformedArtifact(name=name, reason="bytecode.object is not a hex string") from exc

    if not bytecode:
        raise MalformedArtifact(name=name, reason="bytecode.object is empty")

    logger.debug(f"Loaded {name} from {path} ({len(bytecode)} bytes)")

    return ContractArtifact(
        name=name,
        abi=compiler_output.abi,
        bytecode=bytecode,
    )
