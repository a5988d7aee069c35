"""
Root GraphQL query definitions
"""

import strawberry

from ..types.person import Person


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    async def people_count(self, info: strawberry.Info) -> int:
        """Get the number of people known to the graph."""
        from ..resolvers.person import resolve_people_count

        return await resolve_people_count(info)

    @strawberry.field
    async def person(
        self,
        info: strawberry.Info,
        test_string_arg: str | None = strawberry.UNSET,
        test_int_arg: int | None = strawberry.UNSET,
        test_float_arg: float | None = strawberry.UNSET,
        test_bool_arg: bool | None = strawberry.UNSET,
    ) -> Person:
        """Get the person, echoing each argument back on the matching *ArgVal field."""
        from ..resolvers.person import resolve_person

        return await resolve_person(
            info,
            string_arg=test_string_arg,
            int_arg=test_int_arg,
            float_arg=test_float_arg,
            bool_arg=test_bool_arg,
        )
