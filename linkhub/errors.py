"""
Error taxonomy for LinkHub.

The manager raises these; the API layer (see `main.py`) maps each class to
an HTTP status and a `{"message": ...}` body. Anything else escaping a
route becomes a 500.

    ValidationError    -> 400  (missing/malformed fields)
    InvalidIdentifier  -> 400  (id is not a UUID)
    NotFoundError      -> 404  (no link with that id)
"""

from typing import List, Optional


class LinkError(Exception):
    """Base class for all link-service errors."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message

    def to_dict(self) -> dict:
        return {"message": self.message}


class ValidationError(LinkError):
    """One or more fields failed validation.

    `errors` holds the individual messages; `message` is the summary.
    """

    status_code = 400
    message = "Validation Error"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.errors: List[str] = list(errors or [])

    def to_dict(self) -> dict:
        body = {"message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class InvalidIdentifier(LinkError):
    status_code = 400
    message = "Invalid link ID"


class NotFoundError(LinkError):
    status_code = 404
    message = "Link not found"
