"""
Pet GraphQL type definitions
"""

from enum import Enum

import strawberry


@strawberry.enum
class DogBreed(Enum):
    """Dog breed enumeration."""

    CHIHUAHUA = "CHIHUAHUA"
    RETRIEVER = "RETRIEVER"
    LAB = "LAB"


@strawberry.enum
class CatBreed(Enum):
    """Cat breed enumeration."""

    TABBY = "TABBY"
    MIX = "MIX"


@strawberry.interface
class Pet:
    """Anything a person can own; every implementer exposes a name."""

    name: str


@strawberry.type
class Dog(Pet):
    """Dog type for GraphQL API."""

    dog_breed: DogBreed


@strawberry.type
class Cat(Pet):
    """Cat type for GraphQL API."""

    cat_breed: CatBreed
