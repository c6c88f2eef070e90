"""
Application package initializer.

The project is split into a small number of layers: ``core`` holds
configuration, logging, storage and security helpers, ``schemas``
holds the Pydantic models exchanged over HTTP, ``services`` holds the
business logic (signup admission and pagination among it) and
``api`` holds the versioned FastAPI routers.  The ASGI application
itself lives in ``main``.
"""
