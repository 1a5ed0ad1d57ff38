# Services package init
"""
Podcast Backend: Services Layer
================================

What:  Business logic between the GraphQL resolvers and the store.
How:   Services take their collaborators as constructor arguments and return
       Pydantic envelopes; `main.create_app()` wires them together.

Service Inventory:
    - CredentialStore: user rows and bcrypt password hashes
    - TokenService:    signed bearer tokens (itsdangerous)
    - AccessGuard:     X-JWT header → identity context, `login_required`
    - AccountService:  createAccount, login, seeProfile, me, editProfile
    - CatalogService:  podcast and episode CRUD
"""
