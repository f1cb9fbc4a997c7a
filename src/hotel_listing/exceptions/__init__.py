# hotel_listing/exceptions/
# ├── base.py                    # domain errors (NotFoundError, BadRequestError), RepositoryError, ErrorDetails
# ├── integrity_classifier.py    # classify SQLAlchemy IntegrityError by constraint kind
# └── integrity_mapper.py        # turn classified DB errors into app-level errors; db_error_handler

from .base import (
    DomainError,
    NotFoundError,
    BadRequestError,
    RepositoryError,
    ErrorDetails,
)

__all__ = [
    "DomainError",
    "NotFoundError",
    "BadRequestError",
    "RepositoryError",
    "ErrorDetails",
]
