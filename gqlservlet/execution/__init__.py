"""GraphQL execution collaborators: requests, inputs, invoker and object mapper."""

from .input import GraphQLSchemaProvider, InvocationInputFactory, SingleInvocationInput
from .invoker import ExecutionOutcome, QueryInvoker
from .object_mapper import GraphQLObjectMapper
from .request import GraphQLRequest


__all__ = [
    "ExecutionOutcome",
    "GraphQLObjectMapper",
    "GraphQLRequest",
    "GraphQLSchemaProvider",
    "InvocationInputFactory",
    "QueryInvoker",
    "SingleInvocationInput",
]
