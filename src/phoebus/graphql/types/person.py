"""
Person GraphQL type definitions
"""

import strawberry

from .pet import Pet


@strawberry.type
class Person:
    """Person type for GraphQL API."""

    first_name: str
    last_name: str
    age: int | None

    # Echoes of the arguments passed to Query.person
    string_arg_val: str | None
    int_arg_val: int | None
    float_arg_val: float | None
    bool_arg_val: bool | None

    pets: list[Pet]
