"""企業操作で発生する業務例外の定義."""

import uuid


class CompanyError(Exception):
    """企業操作の業務例外の基底クラス."""


class CompanyNotFoundError(CompanyError):
    """対象の企業が存在しない.

    Attributes
    ----------
        company_id: 検索に使用した企業ID
        isin: 検索に使用したISIN

    """

    def __init__(
        self,
        company_id: uuid.UUID | None = None,
        isin: str | None = None,
    ) -> None:
        self.company_id = company_id
        self.isin = isin
        if isin is not None:
            message = f"Company with ISIN {isin} not found"
        else:
            message = f"Company with ID {company_id} not found"
        super().__init__(message)


class CompanyValidationError(CompanyError):
    """フィールド検証に失敗した.

    Attributes
    ----------
        errors: フィールド名 -> エラーメッセージのリスト

    """

    def __init__(self, errors: dict[str, list[str]]) -> None:
        self.errors = errors
        super().__init__(f"Validation failed: {', '.join(errors)}")


class IsinConflictError(CompanyError):
    """同じISINを持つ企業が既に存在する.

    Attributes
    ----------
        isin: 重複したISIN

    """

    def __init__(self, isin: str) -> None:
        self.isin = isin
        super().__init__(f"A company with ISIN {isin} already exists.")
