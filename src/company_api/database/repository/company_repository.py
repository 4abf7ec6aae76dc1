"""Companyテーブルのリポジトリモジュール."""

import logging
import uuid
from collections.abc import Sequence
from typing import Annotated

from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from company_api.common.errors import IsinConflictError
from company_api.common.log_prefix import LogPrefix
from company_api.database.database import get_async_db_session
from company_api.database.model.company import Company

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"
ISIN_UNIQUE_INDEX = "ix_companies_isin"
SQLITE_ISIN_UNIQUE_MESSAGE = "UNIQUE constraint failed: companies.isin"


class CompanyRepository:
    """Companyテーブルへのデータアクセスを提供するリポジトリ.

    ISINの一意性はDBの一意インデックスで保証し、
    違反時は IsinConflictError に変換して送出する。

    Attributes
    ----------
        session: 非同期DBセッション

    """

    def __init__(self, session: AsyncSession) -> None:
        """CompanyRepositoryを初期化.

        Args:
        ----
            session: 非同期DBセッション

        """
        self.session = session

    async def get_all(self) -> Sequence[Company]:
        """全企業を企業名順で取得.

        Returns
        -------
            Companyオブジェクトのリスト

        """
        stmt = select(Company).order_by(col(Company.name))
        result = await self.session.exec(stmt)
        return result.all()

    async def get_by_id(self, company_id: uuid.UUID) -> Company | None:
        """企業IDで1件取得.

        Args:
        ----
            company_id: 企業ID

        Returns:
        -------
            Company、存在しない場合はNone

        """
        return await self.session.get(Company, company_id)

    async def get_by_isin(self, isin: str) -> Company | None:
        """ISINで1件取得.

        Args:
        ----
            isin: 国際証券識別番号

        Returns:
        -------
            Company、存在しない場合はNone

        """
        stmt = select(Company).where(col(Company.isin) == isin)
        result = await self.session.exec(stmt)
        return result.first()

    async def exists_by_isin(
        self,
        isin: str,
        exclude_id: uuid.UUID | None = None,
    ) -> bool:
        """指定ISINを持つ企業が存在するか判定.

        Args:
        ----
            isin: 国際証券識別番号
            exclude_id: 判定から除外する企業ID(更新対象自身)

        Returns:
        -------
            他の企業が同じISINを保持していればTrue

        """
        stmt = select(Company.id).where(col(Company.isin) == isin)
        if exclude_id is not None:
            stmt = stmt.where(col(Company.id) != exclude_id)

        result = await self.session.exec(stmt)
        return result.first() is not None

    async def create(self, company: Company) -> Company:
        """企業を登録.

        Args:
        ----
            company: 登録するCompany

        Returns:
        -------
            登録後のCompany

        Raises:
        ------
            IsinConflictError: ISINの一意制約違反時

        """
        isin = company.isin
        self.session.add(company)
        await self._commit(isin)
        await self.session.refresh(company)
        logger.info(f"{LogPrefix.CREATE_COMPANY} created company id={company.id}")
        return company

    async def update(self, company: Company) -> Company | None:
        """読み込み済みの企業の変更を保存.

        Args:
        ----
            company: 変更を加えたCompany(同一セッションで取得済み)

        Returns:
        -------
            更新後のCompany、保存前に行が削除されていた場合はNone

        Raises:
        ------
            IsinConflictError: ISINの一意制約違反時

        """
        company_id = company.id
        isin = company.isin
        self.session.add(company)
        try:
            await self._commit(isin)
        except StaleDataError:
            await self.session.rollback()
            logger.warning(
                f"{LogPrefix.UPDATE_COMPANY} company id={company_id} "
                "was deleted before the update was written"
            )
            return None

        await self.session.refresh(company)
        return company

    async def delete(self, company_id: uuid.UUID) -> bool:
        """企業を物理削除.

        Args:
        ----
            company_id: 企業ID

        Returns:
        -------
            削除した場合True、存在しない場合False

        """
        company = await self.session.get(Company, company_id)
        if company is None:
            return False

        await self.session.delete(company)
        await self.session.commit()
        logger.info(f"{LogPrefix.DELETE_COMPANY} deleted company id={company_id}")
        return True

    async def _commit(self, isin: str) -> None:
        """コミットし、ISINの一意制約違反を業務例外へ変換."""
        try:
            await self.session.commit()
        except IntegrityError as error:
            await self.session.rollback()
            if not self._is_isin_violation(error):
                logger.error(
                    "companies write failed: sqlstate=%s message=%s",
                    getattr(error.orig, "sqlstate", None),
                    str(error.orig),
                )
                raise
            logger.warning(f"duplicate isin rejected by store: isin={isin}")
            raise IsinConflictError(isin) from error

    @staticmethod
    def _is_isin_violation(error: IntegrityError) -> bool:
        """IntegrityErrorがISIN一意インデックス由来か判定.

        PostgreSQLはSQLSTATE 23505とインデックス名で判定し、
        SQLSTATEを持たないドライバ(SQLite)はメッセージで判定する。
        """
        orig = error.orig
        sqlstate = getattr(orig, "sqlstate", None)
        if sqlstate is not None:
            return sqlstate == UNIQUE_VIOLATION and ISIN_UNIQUE_INDEX in str(orig)
        return SQLITE_ISIN_UNIQUE_MESSAGE in str(orig)


async def get_company_repository(
    session: Annotated[AsyncSession, Depends(get_async_db_session)],
) -> CompanyRepository:
    """FastAPI DI用のCompanyRepositoryファクトリ.

    Returns
    -------
        CompanyRepository

    """
    return CompanyRepository(session)
