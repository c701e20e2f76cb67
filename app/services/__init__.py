"""
Service layer for business logic.

This module provides service classes that encapsulate business logic,
separating it from HTTP handling in routes and data access in repositories.
The auction, team and player services are imported from their own modules
because they depend on the engine, which in turn uses the errors below.
"""

from app.services.base import (
    AuthorizationError,
    BaseService,
    ConflictError,
    NotFoundError,
    ServiceError,
    ValidationError,
)

__all__ = [
    'BaseService',
    'ServiceError',
    'NotFoundError',
    'ValidationError',
    'ConflictError',
    'AuthorizationError',
]
