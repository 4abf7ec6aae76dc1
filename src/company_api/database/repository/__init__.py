"""リポジトリモジュール."""

from .company_repository import (
    CompanyRepository,
    get_company_repository,
)

__all__ = [
    "CompanyRepository",
    "get_company_repository",
]
