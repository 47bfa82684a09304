"""
CascadeBlog Backend - Application Package
==========================================

Layers:

    ┌─────────────────────────────────────┐
    │   Routes + access policies (HTTP)   │  app/routes, app/dependencies.py
    ├─────────────────────────────────────┤
    │   Services (queries, error mapping) │  app/services
    ├─────────────────────────────────────┤
    │   Schemas (API contract)            │  app/schemas
    ├─────────────────────────────────────┤
    │   Database (motor client, indexes)  │  app/database.py
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
