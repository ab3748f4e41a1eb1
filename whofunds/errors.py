"""
Errors raised by the donor lookup pipeline.

Each error carries a machine-readable ``kind`` and the HTTP status the API
layer answers with.
"""
from typing import Optional


class DonorLookupError(Exception):
    """Base exception for donor lookup errors."""

    kind = "Error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message, "kind": self.kind}


class InvalidInputError(DonorLookupError):
    """Raised when a candidate ID is missing or malformed."""

    kind = "InvalidInput"
    status_code = 400


class MissingCredentialError(DonorLookupError):
    """Raised when FEC_API_KEY is not configured."""

    kind = "MissingCredential"
    status_code = 500


class NotFoundError(DonorLookupError):
    """Raised when a candidate has no resolvable committee."""

    kind = "NotFound"
    status_code = 404


class UpstreamFailureError(DonorLookupError):
    """Raised when the FEC API answers with an error or an unexpected body."""

    kind = "UpstreamFailure"
    status_code = 502

    def __init__(self, message: str, upstream_status: Optional[int] = None):
        super().__init__(message)
        self.upstream_status = upstream_status

    def to_dict(self) -> dict:
        data = super().to_dict()
        if self.upstream_status is not None:
            data["upstreamStatus"] = self.upstream_status
        return data
