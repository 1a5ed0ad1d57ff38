# Routes package init
"""
Podcast Backend: API Routes Package
====================================

Route Inventory:
    - graphql.py: POST /graphql   (all account and catalog operations)
                  GET  /graphql   (GraphQL explorer)
    - health.py:  GET  /health    (service health check)

Routes handle HTTP concerns only; resolvers and services do the work.
"""
