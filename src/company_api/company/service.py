"""企業マスタのサービスモジュール."""

import logging
import uuid
from collections.abc import Callable, Mapping, Sequence
from datetime import UTC, datetime
from typing import Annotated

from fastapi import Depends

from company_api.common.errors import (
    CompanyNotFoundError,
    CompanyValidationError,
    IsinConflictError,
)
from company_api.common.log_prefix import LogPrefix
from company_api.company.schema import CompanyCreateRequest, CompanyUpdateRequest
from company_api.company.validation import FIELD_RULES, validate_company_fields
from company_api.database.model.company import Company
from company_api.database.repository.company_repository import (
    CompanyRepository,
    get_company_repository,
)

# 部分更新で変更可能なフィールド(id, created_at, updated_at は対象外)
PATCHABLE_FIELDS = frozenset(FIELD_RULES)

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """現在のUTC日時."""
    return datetime.now(UTC)


class CompanyService:
    """企業マスタに関するビジネスロジックを提供するサービス.

    Attributes
    ----------
        company_repo: Companyリポジトリ
        clock: 現在日時を返す関数(テスト時に差し替え可能)

    """

    def __init__(
        self,
        company_repo: CompanyRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """CompanyServiceを初期化.

        Args:
        ----
            company_repo: Companyリポジトリ
            clock: 現在日時を返す関数

        """
        self.company_repo = company_repo
        self.clock = clock

    # --- パブリックメソッド ---

    async def list_companies(self) -> Sequence[Company]:
        """全企業を企業名順で取得."""
        return await self.company_repo.get_all()

    async def get_company(self, company_id: uuid.UUID) -> Company:
        """企業IDで企業を取得.

        Raises
        ------
            CompanyNotFoundError: 企業が存在しない場合

        """
        company = await self.company_repo.get_by_id(company_id)
        if company is None:
            raise CompanyNotFoundError(company_id=company_id)
        return company

    async def get_company_by_isin(self, isin: str) -> Company:
        """ISINで企業を取得.

        Raises
        ------
            CompanyNotFoundError: 企業が存在しない場合

        """
        company = await self.company_repo.get_by_isin(isin)
        if company is None:
            raise CompanyNotFoundError(isin=isin)
        return company

    async def create_company(self, data: CompanyCreateRequest) -> Company:
        """企業を新規作成.

        Args:
        ----
            data: 作成リクエスト

        Returns:
        -------
            作成したCompany

        Raises:
        ------
            CompanyValidationError: 検証エラー時
            IsinConflictError: 同じISINの企業が既に存在する場合

        """
        values = data.model_dump()
        self._raise_for_errors(validate_company_fields(values, partial=False))

        isin = values["isin"].strip()
        if await self.company_repo.exists_by_isin(isin):
            raise IsinConflictError(isin)

        now = self.clock()
        company = Company(
            **{name: self._normalize(value) for name, value in values.items()},
            created_at=now,
            updated_at=now,
        )
        return await self.company_repo.create(company)

    async def replace_company(
        self,
        company_id: uuid.UUID,
        data: CompanyUpdateRequest,
    ) -> Company:
        """企業の全項目を上書き更新.

        Args:
        ----
            company_id: 企業ID
            data: 全体更新リクエスト

        Returns:
        -------
            更新後のCompany

        Raises:
        ------
            CompanyNotFoundError: 企業が存在しない場合
            CompanyValidationError: 検証エラー時
            IsinConflictError: 他の企業が同じISINを保持している場合

        """
        company = await self.get_company(company_id)

        values = data.model_dump()
        self._raise_for_errors(validate_company_fields(values, partial=False))

        isin = values["isin"].strip()
        if await self.company_repo.exists_by_isin(isin, exclude_id=company_id):
            raise IsinConflictError(isin)

        for name, value in values.items():
            setattr(company, name, self._normalize(value))
        company.updated_at = self.clock()

        updated = await self._save(company_id, company)
        logger.info(f"{LogPrefix.UPDATE_COMPANY} replaced company id={company_id}")
        return updated

    async def patch_company(
        self,
        company_id: uuid.UUID,
        fields: Mapping[str, str | None],
    ) -> Company:
        """送信されたフィールドのみを部分更新.

        fields に含まれないフィールドは一切変更しない。
        明示的な None / 空文字は「クリア」の指示として扱い、
        必須項目であれば検証エラーとする。
        空の fields は更新日時のみを進める。

        Args:
        ----
            company_id: 企業ID
            fields: 送信されたフィールド名 -> 値(送信順)

        Returns:
        -------
            更新後のCompany

        Raises:
        ------
            CompanyNotFoundError: 企業が存在しない場合
            CompanyValidationError: 送信フィールドの検証エラー時
            IsinConflictError: 他の企業が同じISINを保持している場合

        """
        company = await self.get_company(company_id)

        provided: dict[str, str | None] = {}
        for name, value in fields.items():
            if name not in PATCHABLE_FIELDS:
                logger.warning(
                    f"{LogPrefix.PATCH_COMPANY} field '{name}' is not allowed "
                    f"for patching company id={company_id}, ignored"
                )
                continue
            provided[name] = value

        self._raise_for_errors(validate_company_fields(provided, partial=True))

        new_isin = provided.get("isin")
        if new_isin is not None:
            new_isin = new_isin.strip()
            if new_isin != company.isin and await self.company_repo.exists_by_isin(
                new_isin, exclude_id=company_id
            ):
                raise IsinConflictError(new_isin)

        for name, value in provided.items():
            setattr(company, name, self._normalize(value))
        company.updated_at = self.clock()

        updated = await self._save(company_id, company)
        logger.info(
            f"{LogPrefix.PATCH_COMPANY} patched company id={company_id} "
            f"fields={list(provided) or '(none)'}"
        )
        return updated

    async def delete_company(self, company_id: uuid.UUID) -> None:
        """企業を物理削除.

        Raises
        ------
            CompanyNotFoundError: 企業が存在しない場合

        """
        deleted = await self.company_repo.delete(company_id)
        if not deleted:
            raise CompanyNotFoundError(company_id=company_id)

    # --- プライベートメソッド ---

    async def _save(self, company_id: uuid.UUID, company: Company) -> Company:
        """変更を保存し、保存前に削除されていた場合はNotFoundとする."""
        updated = await self.company_repo.update(company)
        if updated is None:
            raise CompanyNotFoundError(company_id=company_id)
        return updated

    @staticmethod
    def _raise_for_errors(errors: dict[str, list[str]]) -> None:
        """検証エラーがあれば CompanyValidationError を送出."""
        if errors:
            raise CompanyValidationError(errors)

    @staticmethod
    def _normalize(value: str | None) -> str | None:
        """前後の空白を除去し、空文字はNoneに揃える."""
        if value is None:
            return None
        stripped = value.strip()
        return stripped or None


async def get_company_service(
    company_repo: Annotated[
        CompanyRepository,
        Depends(get_company_repository),
    ],
) -> CompanyService:
    """FastAPI DI用のCompanyServiceファクトリ.

    Returns
    -------
        CompanyService

    """
    return CompanyService(company_repo=company_repo)
