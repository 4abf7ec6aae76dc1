"""企業マスタ一括取り込みバッチジョブ.

CSVファイルから企業を読み込み、CompanyService経由でデータベースに登録する。
検証エラーやISIN重複の行はログに記録してスキップする。
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import pandas as pd
import typer
from sqlmodel.ext.asyncio.session import AsyncSession

from company_api.common.errors import CompanyValidationError, IsinConflictError
from company_api.common.log_prefix import LogPrefix
from company_api.company.schema import CompanyCreateRequest
from company_api.company.service import CompanyService
from company_api.company.validation import validate_company_fields
from company_api.database.database import async_engine
from company_api.database.repository import CompanyRepository
from company_api.settings.settings import get_settings

REQUIRED_COLUMNS = ["name", "stock_ticker", "exchange", "isin"]
OPTIONAL_COLUMNS = ["website"]

# CSVヘッダはワイヤ形式(camelCase)でも受け付ける
COLUMN_ALIASES = {"stockTicker": "stock_ticker"}

app = typer.Typer()

settings = get_settings()
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@dataclass
class ImportSummary:
    """取り込み結果の集計.

    Attributes
    ----------
        total: CSVの行数
        imported: 登録(ドライラン時は登録可能)と判定した行数
        skipped: スキップした行数

    """

    total: int = 0
    imported: int = 0
    skipped: int = 0


def read_companies_csv(csv_path: Path) -> pd.DataFrame:
    """企業CSVを読み込み、列名を正規化する.

    Args:
    ----
        csv_path: CSVファイルのパス

    Returns:
    -------
        name, stock_ticker, exchange, isin, website 列を持つDataFrame

    Raises:
    ------
        ValueError: 必須列が不足している場合

    """
    df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)
    df = df.rename(columns=COLUMN_ALIASES)

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"{csv_path}: missing required column(s) {missing}")

    for column in OPTIONAL_COLUMNS:
        if column not in df.columns:
            df[column] = ""

    return df[REQUIRED_COLUMNS + OPTIONAL_COLUMNS]


async def import_companies(
    session: AsyncSession,
    csv_path: Path,
    dry_run: bool = False,
) -> ImportSummary:
    """CSVの企業を1行ずつ登録.

    Args:
    ----
        session: 非同期DBセッション
        csv_path: CSVファイルのパス
        dry_run: ドライランモード(検証のみ、DB書き込みなし)

    Returns:
    -------
        取り込み結果の集計

    """
    df = read_companies_csv(csv_path)
    service = CompanyService(company_repo=CompanyRepository(session))
    summary = ImportSummary(total=len(df))
    # ドライランではDBに書かないため、ファイル内で登録予定のISINを保持する
    dry_run_isins: set[str] = set()

    for line_no, row in enumerate(df.to_dict(orient="records"), start=2):
        data = CompanyCreateRequest(**row)

        if dry_run:
            errors = validate_company_fields(data.model_dump(), partial=False)
            if errors:
                logger.warning(f"line {line_no}: DRY RUN - invalid {errors}")
                summary.skipped += 1
            elif data.isin in dry_run_isins or (
                await service.company_repo.exists_by_isin(data.isin)
            ):
                logger.warning(
                    f"line {line_no}: DRY RUN - ISIN {data.isin} already exists"
                )
                summary.skipped += 1
            else:
                logger.info(f"line {line_no}: DRY RUN - would import {data.isin}")
                dry_run_isins.add(data.isin)
                summary.imported += 1
            continue

        try:
            company = await service.create_company(data)
        except CompanyValidationError as e:
            logger.warning(f"line {line_no}: skipped, invalid {e.errors}")
            summary.skipped += 1
            continue
        except IsinConflictError as e:
            logger.warning(f"line {line_no}: skipped, {e}")
            summary.skipped += 1
            continue

        summary.imported += 1
        logger.info(
            f"{LogPrefix.IMPORT_COMPANY} line {line_no}: "
            f"imported {company.isin} as id={company.id}"
        )

    return summary


@app.command()
def main(
    csv_path: Annotated[Path, typer.Argument(help="取り込むCSVファイル")],
    dry_run: Annotated[
        bool,
        typer.Option(help="ドライランモード(DB書き込みなし)"),
    ] = False,
) -> None:
    """CSVの企業をDBに取り込む.

    Args:
    ----
        csv_path: 取り込むCSVファイル
        dry_run: ドライランモード

    """
    logger.info(
        f"{LogPrefix.BATCH_JOB} Starting with csv_path={csv_path}, "
        f"dry_run={dry_run}"
    )

    summary = asyncio.run(_run(csv_path, dry_run))

    logger.info(f"{LogPrefix.BATCH_JOB} Completed")
    typer.echo(
        f"total={summary.total} imported={summary.imported} "
        f"skipped={summary.skipped}"
    )


async def _run(csv_path: Path, dry_run: bool) -> ImportSummary:
    """セッションを開いて取り込みを実行."""
    async with AsyncSession(async_engine) as session:
        return await import_companies(session, csv_path, dry_run=dry_run)


if __name__ == "__main__":
    app()
