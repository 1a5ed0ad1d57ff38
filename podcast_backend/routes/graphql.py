"""
Podcast Backend: GraphQL Endpoint
==================================

What:  Exposes the GraphQL API at /graphql.
How:   POST parses the JSON body, builds the identity context through the
       access guard and executes the operation with `ariadne.graphql()`.
       GET hands the request to the Ariadne ASGI app, which serves the explorer.
Who:   Every account and catalog client call.

Response shape:
    200 {"data": {...}}                                  domain success/failure
    200 {"data": null, "errors": [{"message": "Forbidden resource", ...}]}
    400 {"errors": [...]}                                unparseable or invalid document

Execution errors (including Forbidden) are ordinary 200 responses; only
requests that never reach execution get a 400.
"""

from ariadne import graphql as execute_graphql
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.responses import Response

router = APIRouter(tags=["GraphQL"])


@router.get("/graphql", include_in_schema=False)
async def graphql_explorer(request: Request) -> Response:
    """Serves the GraphQL explorer UI (and answers GET queries)."""
    return await request.app.state.graphql_app.handle_request(request)


@router.post(
    "/graphql",
    summary="Execute a GraphQL query or mutation",
    description=(
        "Accepts `{query, variables, operationName}`. Send the token returned by "
        "the `login` mutation in the X-JWT header to call `me` and `editProfile`."
    ),
)
async def graphql_endpoint(request: Request) -> Response:
    try:
        data = await request.json()
    except ValueError:
        return JSONResponse(
            {"errors": [{"message": "Request body is not valid JSON"}]},
            status_code=400,
        )

    state = request.app.state
    _, result = await execute_graphql(
        state.graphql_schema,
        data,
        context_value=await state.access_guard.context_for_request(request, data),
        debug=state.graphql_debug,
    )
    # Parse and validation failures carry no "data" key
    return JSONResponse(result, status_code=200 if "data" in result else 400)
