"""
Service layer abstraction.

Each service encapsulates business logic for a domain.  Handlers in
``api/v1/endpoints`` only parse input, call a service and translate
domain errors into HTTP responses.
"""
