"""企業フィールドの検証ルール.

作成・全体更新・部分更新で共通に使う純粋関数群。I/Oは行わない。
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Annotated

from pydantic import AnyUrl, TypeAdapter, UrlConstraints, ValidationError

from company_api.database.model.company import (
    EXCHANGE_MAX_LENGTH,
    NAME_MAX_LENGTH,
    STOCK_TICKER_MAX_LENGTH,
    WEBSITE_MAX_LENGTH,
)

ISIN_PATTERN = re.compile(r"^[A-Z]{2}[A-Z0-9]{9}[0-9]$")

ISIN_FORMAT_MESSAGE = (
    "ISIN format is invalid. It must start with two letters followed by "
    "9 alphanumeric characters and end with a digit"
)
URL_FORMAT_MESSAGE = "Website must be a valid URL"

WEBSITE_URL_SCHEMES = ["http", "https", "ftp"]

_url_adapter = TypeAdapter(
    Annotated[AnyUrl, UrlConstraints(allowed_schemes=WEBSITE_URL_SCHEMES)]
)


@dataclass(frozen=True)
class FieldRule:
    """1フィールド分の検証ルール.

    Attributes
    ----------
        label: エラーメッセージに使う表示名
        required: 空値を許可しないか
        max_length: 最大文字数
        length_label: 文字数超過メッセージの表示名
        is_isin: ISIN形式チェックを行うか
        is_url: URL形式チェックを行うか

    """

    label: str
    required: bool
    max_length: int | None = None
    length_label: str | None = None
    is_isin: bool = False
    is_url: bool = False


FIELD_RULES: dict[str, FieldRule] = {
    "name": FieldRule(
        label="Name",
        required=True,
        max_length=NAME_MAX_LENGTH,
    ),
    "stock_ticker": FieldRule(
        label="Stock ticker",
        required=True,
        max_length=STOCK_TICKER_MAX_LENGTH,
    ),
    "exchange": FieldRule(
        label="Exchange",
        required=True,
        max_length=EXCHANGE_MAX_LENGTH,
    ),
    "isin": FieldRule(
        label="ISIN",
        required=True,
        is_isin=True,
    ),
    "website": FieldRule(
        label="Website",
        required=False,
        max_length=WEBSITE_MAX_LENGTH,
        length_label="Website URL",
        is_url=True,
    ),
}


def check_required(value: str | None) -> bool:
    """値が存在し、空白のみでないことを確認."""
    return value is not None and value.strip() != ""


def check_max_length(value: str, max_length: int) -> bool:
    """値の文字数が上限以内であることを確認."""
    return len(value) <= max_length


def is_valid_isin(value: str) -> bool:
    """ISIN形式(2文字の英大文字 + 英数字9桁 + 数字1桁)か判定."""
    return ISIN_PATTERN.fullmatch(value) is not None


def is_valid_url(value: str) -> bool:
    """http(s)またはftpの絶対URLとして解釈できるか判定."""
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def validate_field(name: str, value: str | None) -> list[str]:
    """1フィールドを検証し、エラーメッセージのリストを返す.

    Args:
    ----
        name: フィールド名 (FIELD_RULESのキー)
        value: 検証する値

    Returns:
    -------
        エラーメッセージのリスト(問題なければ空)

    """
    rule = FIELD_RULES[name]

    if value is None or not check_required(value):
        if rule.required:
            return [f"{rule.label} is required"]
        # 任意項目の空値はクリア扱い
        return []

    messages: list[str] = []
    if rule.max_length is not None and not check_max_length(
        value, rule.max_length
    ):
        label = rule.length_label or rule.label
        messages.append(
            f"{label} cannot exceed {rule.max_length} characters"
        )
    if rule.is_isin and not is_valid_isin(value):
        messages.append(ISIN_FORMAT_MESSAGE)
    if rule.is_url and not is_valid_url(value):
        messages.append(URL_FORMAT_MESSAGE)
    return messages


def validate_company_fields(
    values: Mapping[str, str | None],
    *,
    partial: bool,
) -> dict[str, list[str]]:
    """企業フィールドをまとめて検証.

    partial=False の場合は全ルールを適用し、未指定の必須項目もエラーにする。
    partial=True の場合は values に含まれるフィールドのみを検証する。

    Args:
    ----
        values: フィールド名 -> 値
        partial: 部分更新モード

    Returns:
    -------
        フィールド名 -> エラーメッセージのリスト(エラーのあるフィールドのみ)

    """
    errors: dict[str, list[str]] = {}
    for name in FIELD_RULES:
        if partial and name not in values:
            continue
        messages = validate_field(name, values.get(name))
        if messages:
            errors[name] = messages
    return errors
