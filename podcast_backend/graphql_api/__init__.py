"""
GraphQL layer: the SDL schema (`schema.graphql`) and the resolver routing
table that maps each operation name to an account or catalog service call.
"""

from podcast_backend.graphql_api.resolvers import build_schema

__all__ = ["build_schema"]
