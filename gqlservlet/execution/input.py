"""Schema providers and invocation input construction.

An invocation input binds a :class:`GraphQLRequest` to the schema, root value
and context value it should run against, so the invoker has nothing left to
resolve.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from graphql import GraphQLSchema, build_schema

from .request import GraphQLRequest


if TYPE_CHECKING:
    from gqlservlet.services.http import ServletRequest


ContextBuilder = Callable[["ServletRequest | None"], Any]


class GraphQLSchemaProvider:
    """Supplies the schema a request runs against."""

    def __init__(self, schema: GraphQLSchema):
        self._schema = schema

    @classmethod
    def from_sdl(cls, sdl: str) -> "GraphQLSchemaProvider":
        """Build a provider from schema definition language text."""
        return cls(build_schema(sdl))

    def get_schema(self, request: "ServletRequest | None" = None) -> GraphQLSchema:
        return self._schema

    def get_query_field_names(self) -> list[str]:
        query_type = self._schema.query_type
        return list(query_type.fields) if query_type is not None else []

    def get_mutation_field_names(self) -> list[str]:
        mutation_type = self._schema.mutation_type
        return list(mutation_type.fields) if mutation_type is not None else []


@dataclass(frozen=True)
class SingleInvocationInput:
    """A prepared, ready-to-execute GraphQL request."""

    schema: GraphQLSchema
    request: GraphQLRequest
    root_value: Any = None
    context_value: Any = None


class InvocationInputFactory:
    """Creates :class:`SingleInvocationInput` objects for the configured schema."""

    def __init__(
        self,
        schema_provider: GraphQLSchemaProvider,
        root_value: Any = None,
        context_builder: ContextBuilder | None = None,
    ):
        """Initialize the factory.

        Args:
            schema_provider: Provider of the schema to execute against
            root_value: Root value handed to top-level resolvers
            context_builder: Builds the per-request context value from the
                servlet request (None on the convenience query path)
        """
        self.schema_provider = schema_provider
        self.root_value = root_value
        self.context_builder = context_builder

    def create(
        self,
        graphql_request: GraphQLRequest,
        servlet_request: "ServletRequest | None" = None,
    ) -> SingleInvocationInput:
        context_value = (
            self.context_builder(servlet_request) if self.context_builder else None
        )
        return SingleInvocationInput(
            schema=self.schema_provider.get_schema(servlet_request),
            request=graphql_request,
            root_value=self.root_value,
            context_value=context_value,
        )
