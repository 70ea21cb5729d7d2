"""GraphQL request model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GraphQLRequest(BaseModel):
    """A client's query text, variables and operation name."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    query: str = Field(description="GraphQL document text")
    variables: dict[str, Any] = Field(
        default_factory=dict,
        description="Variable values keyed by variable name",
    )
    operation_name: str | None = Field(
        default=None,
        alias="operationName",
        description="Operation to run when the document holds several",
    )

    @field_validator("variables", mode="before")
    @classmethod
    def validate_variables(cls, v: Any) -> Any:
        """Treat a missing/null variables entry as no variables."""
        return {} if v is None else v

    @classmethod
    def query_only(cls, query: str) -> "GraphQLRequest":
        """Request with just a query: no variables, no operation name."""
        return cls(query=query)
