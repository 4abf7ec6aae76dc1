"""企業APIスキーマ."""

from .company import (
    CompanyCreateRequest,
    CompanyPatchRequest,
    CompanyResponse,
    CompanyUpdateRequest,
    ErrorResponse,
)

__all__ = [
    "CompanyCreateRequest",
    "CompanyPatchRequest",
    "CompanyResponse",
    "CompanyUpdateRequest",
    "ErrorResponse",
]
