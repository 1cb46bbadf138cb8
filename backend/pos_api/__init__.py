"""
Shababeek POS REST API.

Layout:
- core: lifespan, CORS, middlewares, error responder
- models: SQLAlchemy document collections
- schemas: pydantic input/output schemas (camelCase wire format)
- repositories: collection access, credential store
- services: resource pipeline, permissions, domain services
- routers: HTTP endpoints under /api/v1
"""
