"""企業APIのリクエスト/レスポンススキーマ."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

_WIRE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CompanyCreateRequest(BaseModel):
    """企業作成リクエストスキーマ."""

    model_config = _WIRE_CONFIG

    name: str
    stock_ticker: str
    exchange: str
    isin: str
    website: str | None = None


class CompanyUpdateRequest(CompanyCreateRequest):
    """企業全体更新リクエストスキーマ. 全項目を上書きする."""


class CompanyPatchRequest(BaseModel):
    """企業部分更新リクエストスキーマ.

    送信されたフィールドのみ model_fields_set に記録されるため、
    「未指定」と「明示的なnull」を区別できる。
    """

    model_config = _WIRE_CONFIG

    name: str | None = None
    stock_ticker: str | None = None
    exchange: str | None = None
    isin: str | None = None
    website: str | None = None

    def provided_fields(self) -> dict[str, str | None]:
        """送信されたフィールドだけを送信順の辞書で返す."""
        return self.model_dump(exclude_unset=True)


class CompanyResponse(BaseModel):
    """企業レスポンススキーマ."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: uuid.UUID
    name: str
    stock_ticker: str
    exchange: str
    isin: str
    website: str | None
    created_at: datetime
    updated_at: datetime


class ErrorResponse(BaseModel):
    """エラーレスポンススキーマ."""

    detail: str
    errors: dict[str, list[str]] | None = None
    isin: str | None = None
