"""企業マスタモデルを定義するモジュール."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel

NAME_MAX_LENGTH = 200
STOCK_TICKER_MAX_LENGTH = 10
EXCHANGE_MAX_LENGTH = 100
ISIN_LENGTH = 12
WEBSITE_MAX_LENGTH = 500


class Company(SQLModel, table=True):
    """企業マスタを表すデータベースモデル.

    Attributes
    ----------
        id: 企業ID(主キー、作成時に採番)
        name: 企業名 (例: Apple Inc.)
        stock_ticker: ティッカーシンボル (例: AAPL)
        exchange: 上場取引所 (例: NASDAQ)
        isin: 国際証券識別番号、一意 (例: US0378331005)
        website: WebサイトURL(任意)
        created_at: 登録日時
        updated_at: 更新日時

    """

    __tablename__ = "companies"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
    )
    name: str = Field(
        max_length=NAME_MAX_LENGTH,
        index=True,
    )
    stock_ticker: str = Field(
        max_length=STOCK_TICKER_MAX_LENGTH,
        index=True,
    )
    exchange: str = Field(
        max_length=EXCHANGE_MAX_LENGTH,
    )
    isin: str = Field(
        max_length=ISIN_LENGTH,
        unique=True,
        index=True,
    )
    website: str | None = Field(
        max_length=WEBSITE_MAX_LENGTH,
        default=None,
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
