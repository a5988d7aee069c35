"""Fixture dataset served by the demo resolvers."""

from pathlib import Path
from typing import Annotated, Any, Literal

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from .config import settings
from .graphql.types.pet import CatBreed, DogBreed
from .logging import get_logger
from .validation import ValidationError

logger = get_logger(__name__)

# GraphQL Int is a signed 32-bit integer
GRAPHQL_INT_MAX = 2**31 - 1


class DogRecord(BaseModel):
    """A dog owned by the fixture person."""

    kind: Literal["dog"] = "dog"
    name: str
    dog_breed: DogBreed


class CatRecord(BaseModel):
    """A cat owned by the fixture person."""

    kind: Literal["cat"] = "cat"
    name: str
    cat_breed: CatBreed


PetRecord = Annotated[DogRecord | CatRecord, Field(discriminator="kind")]


class PersonRecord(BaseModel):
    """The person answered by ``Query.person``."""

    first_name: str
    last_name: str
    age: int | None = Field(default=None, ge=0, le=GRAPHQL_INT_MAX)
    pets: list[PetRecord] = Field(default_factory=list)


def _default_person() -> PersonRecord:
    return PersonRecord(
        first_name="Zack",
        last_name="Angelo",
        age=39,
        pets=[
            DogRecord(name="Coco", dog_breed=DogBreed.CHIHUAHUA),
            CatRecord(name="Nemo", cat_breed=CatBreed.TABBY),
        ],
    )


class Dataset(BaseModel):
    """Everything the demo resolvers can answer."""

    people_count: int = Field(default=42, ge=0, le=GRAPHQL_INT_MAX)
    person: PersonRecord = Field(default_factory=_default_person)


def load_dataset(path: Path | str | None = None) -> Dataset:
    """Load the fixture dataset.

    Args:
        path: YAML file to read; defaults to ``settings.fixtures_path``.
            With neither set, the built-in dataset is returned.

    Returns:
        Validated Dataset instance

    Raises:
        ValidationError: If the file is missing, is not YAML, or does not
            describe a valid dataset
    """
    if path is None:
        path = settings.fixtures_path
    if path is None:
        return Dataset()

    path = Path(path)
    try:
        with open(path) as f:
            raw: Any = yaml.safe_load(f)
    except OSError as e:
        raise ValidationError(f"Failed to read fixtures from {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ValidationError(f"Fixtures file {path} is not valid YAML: {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValidationError(f"Fixtures file {path} must contain a mapping")
    if "dataset" in raw:
        raw = raw["dataset"] or {}

    try:
        dataset = Dataset.model_validate(raw)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid fixtures in {path}: {e}") from e

    logger.debug(
        "Fixtures loaded",
        path=str(path),
        people_count=dataset.people_count,
        pet_count=len(dataset.person.pets),
    )
    return dataset
