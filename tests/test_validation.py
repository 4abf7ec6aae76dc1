"""企業フィールド検証ルールのテスト."""

import pytest

from company_api.company.validation import (
    ISIN_FORMAT_MESSAGE,
    URL_FORMAT_MESSAGE,
    check_max_length,
    check_required,
    is_valid_isin,
    is_valid_url,
    validate_company_fields,
    validate_field,
)

VALID_COMPANY = {
    "name": "Apple Inc.",
    "stock_ticker": "AAPL",
    "exchange": "NASDAQ",
    "isin": "US0378331005",
    "website": "http://www.apple.com",
}


@pytest.mark.parametrize(
    "isin",
    ["US0378331005", "US1104193065", "NL0000009165", "GB00B03MLX29"],
)
def test_valid_isin(isin):
    assert is_valid_isin(isin)


@pytest.mark.parametrize(
    "isin",
    [
        "BAD",
        "us0378331005",  # 小文字の国コード
        "1S0378331005",  # 先頭が数字
        "US037833100A",  # 末尾が英字
        "US03783310055",  # 13文字
        "US037833100",  # 11文字
        "US-378331005",
        "",
    ],
)
def test_invalid_isin(isin):
    assert not is_valid_isin(isin)


@pytest.mark.parametrize(
    "url",
    [
        "http://www.apple.com",
        "https://example.com/path?q=1",
        "ftp://ftp.example.com/pub",
    ],
)
def test_valid_url(url):
    assert is_valid_url(url)


@pytest.mark.parametrize(
    "url",
    [
        "not a url",
        "www.apple.com",
        "/relative/path",
        "javascript:alert(1)",
        "mailto:a@b.com",
        "file:///etc/passwd",
    ],
)
def test_invalid_url(url):
    assert not is_valid_url(url)


def test_check_required():
    assert check_required("x")
    assert not check_required(None)
    assert not check_required("")
    assert not check_required("   ")


def test_check_max_length():
    assert check_max_length("a" * 10, 10)
    assert not check_max_length("a" * 11, 10)


def test_validate_field_messages():
    assert validate_field("name", "a" * 201) == [
        "Name cannot exceed 200 characters"
    ]
    assert validate_field("stock_ticker", "TOOLONGTICK") == [
        "Stock ticker cannot exceed 10 characters"
    ]
    assert validate_field("exchange", "x" * 101) == [
        "Exchange cannot exceed 100 characters"
    ]
    assert validate_field("isin", "BAD") == [ISIN_FORMAT_MESSAGE]
    assert validate_field("website", "nope") == [URL_FORMAT_MESSAGE]


def test_website_too_long_and_invalid_reports_both():
    messages = validate_field("website", "x" * 501)
    assert "Website URL cannot exceed 500 characters" in messages
    assert URL_FORMAT_MESSAGE in messages


@pytest.mark.parametrize("field", ["name", "stock_ticker", "exchange", "isin"])
@pytest.mark.parametrize("value", [None, "", "  "])
def test_required_fields_reject_empty(field, value):
    assert validate_field(field, value)


@pytest.mark.parametrize("value", [None, ""])
def test_website_accepts_empty(value):
    assert validate_field("website", value) == []


def test_full_validation_accepts_valid_company():
    assert validate_company_fields(VALID_COMPANY, partial=False) == {}


def test_full_validation_reports_missing_required_fields():
    errors = validate_company_fields({"website": None}, partial=False)
    assert set(errors) == {"name", "stock_ticker", "exchange", "isin"}
    assert errors["name"] == ["Name is required"]


def test_partial_validation_checks_only_present_fields():
    assert validate_company_fields({}, partial=True) == {}
    assert validate_company_fields({"name": "New Name"}, partial=True) == {}

    errors = validate_company_fields(
        {"isin": "BAD", "website": None}, partial=True
    )
    assert errors == {"isin": [ISIN_FORMAT_MESSAGE]}


def test_partial_validation_rejects_explicit_null_for_required_field():
    errors = validate_company_fields({"exchange": None}, partial=True)
    assert errors == {"exchange": ["Exchange is required"]}
