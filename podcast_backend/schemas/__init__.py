"""
Pydantic models defining the GraphQL input and output contracts.

Field names are snake_case in Python and camelCase on the wire
(`alias_generator=to_camel`), so resolvers validate raw GraphQL arguments
with `model_validate()` and serialize outputs with `model_dump(by_alias=True)`.
"""
