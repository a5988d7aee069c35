"""
Person and pet resolvers backed by the fixture dataset
"""

from typing import Any

import strawberry

from ...fixtures import CatRecord, Dataset, DogRecord, load_dataset
from ...logging import get_logger
from ..types.person import Person
from ..types.pet import Cat, Dog, Pet

logger = get_logger(__name__)


def get_dataset(info: strawberry.Info) -> Dataset:
    """Return the dataset from the execution context, loading the configured one if absent."""
    context = info.context if isinstance(info.context, dict) else {}
    dataset = context.get("dataset")
    if dataset is None:
        dataset = load_dataset()
        if isinstance(info.context, dict):
            info.context["dataset"] = dataset
    return dataset


def _unset_to_none(value: Any) -> Any:
    return None if value is strawberry.UNSET else value


def pet_from_record(record: DogRecord | CatRecord) -> Pet:
    """Convert a fixture record into its concrete GraphQL type."""
    if isinstance(record, DogRecord):
        return Dog(name=record.name, dog_breed=record.dog_breed)
    return Cat(name=record.name, cat_breed=record.cat_breed)


async def resolve_people_count(info: strawberry.Info) -> int:
    """Resolve Query.peopleCount."""
    return get_dataset(info).people_count


async def resolve_person(
    info: strawberry.Info,
    string_arg: str | None = None,
    int_arg: int | None = None,
    float_arg: float | None = None,
    bool_arg: bool | None = None,
) -> Person:
    """Resolve Query.person.

    Omitted and explicitly null arguments both echo back as null.
    """
    record = get_dataset(info).person

    person = Person(
        first_name=record.first_name,
        last_name=record.last_name,
        age=record.age,
        string_arg_val=_unset_to_none(string_arg),
        int_arg_val=_unset_to_none(int_arg),
        float_arg_val=_unset_to_none(float_arg),
        bool_arg_val=_unset_to_none(bool_arg),
        pets=[pet_from_record(pet) for pet in record.pets],
    )

    logger.debug("Person resolved", pet_count=len(person.pets))
    return person
