"""
Podcast Backend: Shared Schema Pieces
======================================

What:  Base model configuration and the `{ok, error}` envelope every
       mutation and lookup returns.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class GraphQLModel(BaseModel):
    """camelCase aliases on the wire, snake_case attributes in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_graphql(self) -> Dict[str, Any]:
        # mode="json" turns enums and datetimes into plain scalars
        return self.model_dump(by_alias=True, mode="json")


class CoreOutput(GraphQLModel):
    """
    The result envelope.

    Domain failures set `ok=False` and a fixed human-readable `error`;
    data fields stay null.
    """
    ok: bool = Field(description="Whether the operation succeeded")
    error: Optional[str] = Field(default=None, description="Failure message (null on success)")

    @classmethod
    def fail(cls, error: str, **data: Any):
        return cls(ok=False, error=error, **data)

    @classmethod
    def success(cls, **data: Any):
        return cls(ok=True, error=None, **data)
