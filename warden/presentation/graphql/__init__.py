"""GraphQL presentation layer (strawberry)."""

from warden.presentation.graphql.context import GraphQLContext, get_context
from warden.presentation.graphql.schema import schema

__all__ = ["GraphQLContext", "get_context", "schema"]
