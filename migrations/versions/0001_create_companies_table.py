"""Create companies table with seed data

Revision ID: 0001
Revises:
Create Date: 2025-06-09 11:05:42.000000

"""

import uuid
from datetime import UTC, datetime

import sqlalchemy as sa
import sqlmodel
from alembic import op

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

SEED_CREATED_AT = datetime(2025, 6, 5, tzinfo=UTC)


def upgrade() -> None:
    companies = op.create_table(
        "companies",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sqlmodel.AutoString(length=200), nullable=False),
        sa.Column("stock_ticker", sqlmodel.AutoString(length=10), nullable=False),
        sa.Column("exchange", sqlmodel.AutoString(length=100), nullable=False),
        sa.Column("isin", sqlmodel.AutoString(length=12), nullable=False),
        sa.Column("website", sqlmodel.AutoString(length=500), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_companies_isin", "companies", ["isin"], unique=True)
    op.create_index("ix_companies_name", "companies", ["name"])
    op.create_index("ix_companies_stock_ticker", "companies", ["stock_ticker"])

    op.bulk_insert(
        companies,
        [
            {
                "id": uuid.UUID("8973d1e2-3020-49db-862b-2d454746b42d"),
                "name": "Apple Inc.",
                "stock_ticker": "AAPL",
                "exchange": "NASDAQ",
                "isin": "US0378331005",
                "website": "http://www.apple.com",
                "created_at": SEED_CREATED_AT,
                "updated_at": SEED_CREATED_AT,
            },
            {
                "id": uuid.UUID("16511881-10fd-4772-9b62-f1b78513d8af"),
                "name": "British Airways Plc",
                "stock_ticker": "BAIRY",
                "exchange": "Pink Sheets",
                "isin": "US1104193065",
                "website": None,
                "created_at": SEED_CREATED_AT,
                "updated_at": SEED_CREATED_AT,
            },
            {
                "id": uuid.UUID("e8146538-3991-4877-9b76-f276b9849d45"),
                "name": "Heineken NV",
                "stock_ticker": "HEIA",
                "exchange": "Euronext Amsterdam",
                "isin": "NL0000009165",
                "website": None,
                "created_at": SEED_CREATED_AT,
                "updated_at": SEED_CREATED_AT,
            },
        ],
    )


def downgrade() -> None:
    op.drop_index("ix_companies_stock_ticker", table_name="companies")
    op.drop_index("ix_companies_name", table_name="companies")
    op.drop_index("ix_companies_isin", table_name="companies")
    op.drop_table("companies")
