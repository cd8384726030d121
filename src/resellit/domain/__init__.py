"""Domain layer for resellit application.

Services live in their own modules (resellit.domain.product,
resellit.domain.product_import, ...) and are imported from there; this
package only re-exports the error types so that the database layer can
import entities without pulling in the services.
"""

from resellit.domain.errors import (
    ConflictError,
    DomainError,
    MissingColumnsError,
    NotFoundError,
    ValidationError,
)

__all__ = [
    "ConflictError",
    "DomainError",
    "MissingColumnsError",
    "NotFoundError",
    "ValidationError",
]
