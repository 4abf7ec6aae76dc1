"""CompanyRepositoryのテスト."""

import uuid
from datetime import UTC, datetime

import pytest
from sqlalchemy.exc import IntegrityError

from company_api.common.errors import IsinConflictError
from company_api.database.model import Company
from company_api.database.repository import CompanyRepository


def _company(**overrides) -> Company:
    now = datetime.now(UTC)
    data = {
        "name": "Microsoft Corp.",
        "stock_ticker": "MSFT",
        "exchange": "NASDAQ",
        "isin": "US5949181045",
        "created_at": now,
        "updated_at": now,
    }
    data.update(overrides)
    return Company(**data)


async def test_create_and_get_by_id(repo):
    created = await repo.create(_company())

    loaded = await repo.get_by_id(created.id)

    assert loaded is not None
    assert loaded.isin == "US5949181045"


async def test_get_by_id_not_found(repo):
    assert await repo.get_by_id(uuid.uuid4()) is None


async def test_get_by_isin(repo, seeded):
    company = await repo.get_by_isin("US1104193065")
    assert company is not None
    assert company.name == "British Airways Plc"
    assert await repo.get_by_isin("DE0007164600") is None


async def test_get_all_orders_by_name(repo, seeded):
    await repo.create(_company(name="Alphabet Inc.", isin="US02079K3059"))

    names = [c.name for c in await repo.get_all()]

    assert names == sorted(names)
    assert names[0] == "Alphabet Inc."


async def test_exists_by_isin_with_exclusion(repo, seeded):
    apple = seeded["AAPL"]

    assert await repo.exists_by_isin("US0378331005")
    assert not await repo.exists_by_isin("US0378331005", exclude_id=apple.id)
    assert await repo.exists_by_isin(
        "US0378331005", exclude_id=seeded["HEIA"].id
    )
    assert not await repo.exists_by_isin("DE0007164600")


async def test_create_duplicate_isin_is_rejected_by_store(repo, seeded):
    with pytest.raises(IsinConflictError) as exc_info:
        await repo.create(_company(isin="US0378331005"))

    assert exc_info.value.isin == "US0378331005"
    # ロールバック後もセッションは引き続き使用できる
    assert len(await repo.get_all()) == 3


async def test_update_duplicate_isin_is_rejected_by_store(repo, seeded):
    heineken = await repo.get_by_id(seeded["HEIA"].id)
    heineken.isin = "US0378331005"

    with pytest.raises(IsinConflictError):
        await repo.update(heineken)

    reloaded = await repo.get_by_id(seeded["HEIA"].id)
    assert reloaded.isin == "NL0000009165"


async def test_update_persists_changes(repo, seeded):
    apple = await repo.get_by_id(seeded["AAPL"].id)
    apple.exchange = "NYSE"

    updated = await repo.update(apple)

    assert updated is not None
    assert updated.exchange == "NYSE"


async def test_delete(repo, seeded):
    apple_id = seeded["AAPL"].id

    assert await repo.delete(apple_id) is True
    assert await repo.get_by_id(apple_id) is None
    assert await repo.delete(apple_id) is False


class _DriverError(Exception):
    """SQLSTATEを持つドライバ例外の代替."""

    def __init__(self, message: str, sqlstate: str) -> None:
        super().__init__(message)
        self.sqlstate = sqlstate


def _integrity_error(orig: Exception) -> IntegrityError:
    return IntegrityError("INSERT INTO companies ...", {}, orig)


@pytest.mark.parametrize(
    ("orig", "expected"),
    [
        (
            _DriverError(
                'duplicate key value violates unique constraint "ix_companies_isin"',
                "23505",
            ),
            True,
        ),
        (
            _DriverError(
                'duplicate key value violates unique constraint "companies_pkey"',
                "23505",
            ),
            False,
        ),
        (
            _DriverError(
                'null value in column "isin" of relation "companies"',
                "23502",
            ),
            False,
        ),
        (Exception("UNIQUE constraint failed: companies.isin"), True),
        (Exception("NOT NULL constraint failed: companies.isin"), False),
    ],
)
def test_is_isin_violation_keys_on_unique_index(orig, expected):
    assert CompanyRepository._is_isin_violation(_integrity_error(orig)) is expected
