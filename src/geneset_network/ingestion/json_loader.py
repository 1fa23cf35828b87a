"""JSON file loader and validator for enrichment result files."""

import hashlib
import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from geneset_network.errors import InvalidInput
from geneset_network.network.items import Direction, Item


class GeneSetData(BaseModel):
    id: str = Field(min_length=1)
    members: list[str | int] = Field(min_length=1)
    score: float
    direction: Direction = Direction.MIXED
    # Unknown fields are rejected rather than carried along as loose attributes
    model_config = ConfigDict(extra="forbid")

    def to_item(self) -> Item:
        return Item(
            identifier=self.id,
            members=frozenset(self.members),
            score=self.score,
            direction=self.direction,
        )


class FileMetadata(BaseModel):
    source: str | None = None
    comparison: str | None = None
    # Allow all other metadata fields
    model_config = ConfigDict(extra="allow")


class EnrichmentFileData(BaseModel):
    items: list[GeneSetData]
    metadata: FileMetadata | None = None

    def to_items(self) -> list[Item]:
        return [entry.to_item() for entry in self.items]


def load_enrichment_file(file_path: Path) -> EnrichmentFileData:
    """Read and validate a JSON enrichment result file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Validated EnrichmentFileData instance.

    Raises:
        InvalidInput: If the file cannot be read, contains invalid JSON or
            fails validation.
    """
    try:
        with open(file_path, encoding="utf-8") as f:
            raw_data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidInput(f"Invalid JSON in {file_path}: {e}") from e
    except OSError as e:
        raise InvalidInput(f"Cannot read {file_path}: {e}") from e

    try:
        return EnrichmentFileData.model_validate(raw_data)
    except ValidationError as e:
        raise InvalidInput(f"Validation error for {file_path}: {e}") from e


def compute_file_hash(file_path: Path) -> str:
    """Compute SHA-256 hash of a file in 64KB chunks.

    Args:
        file_path: Path to the file.

    Returns:
        Hex digest string (64 characters).
    """
    sha256 = hashlib.sha256()
    with open(file_path, "rb") as f:
        while chunk := f.read(65536):  # 64KB chunks
            sha256.update(chunk)
    return sha256.hexdigest()
