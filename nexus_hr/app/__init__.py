"""
Application package initializer.

The project is split into logical pieces: ``core`` holds configuration,
logging, persistence and security primitives, ``schemas`` the pydantic
models, ``services`` the business logic for each domain (identity,
employees, teams, memberships, audit, read-side queries) and ``api``
the versioned HTTP routers that expose the services.
"""
