"""Initial ledger schema: accounts, vouchers, line items, voucher sequence.

Revision ID: 0001
Revises:
Create Date: 2025-01-01 00:00:00
"""
from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("account_no", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("account_name", sa.String(length=100), nullable=False),
        sa.Column("account_group", sa.Integer(), nullable=False),
        sa.Column("tax_standard", sa.String(length=20), nullable=False),
        sa.Column(
            "type",
            sa.Enum("P&L", "BS", name="account_type_enum", create_constraint=True),
            nullable=False,
        ),
        sa.Column(
            "standard_side",
            sa.Enum("Debit", "Credit", name="balance_side_enum", create_constraint=True),
            nullable=False,
        ),
        sa.CheckConstraint(
            "account_group BETWEEN 1 AND 8", name="ck_accounts_group_range"
        ),
        sa.PrimaryKeyConstraint("account_no"),
    )
    op.create_index("ix_accounts_account_group", "accounts", ["account_group"])

    op.create_table(
        "vouchers",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("voucher_number", sa.Integer(), nullable=False),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column("description", sa.String(length=255), nullable=False),
        sa.Column("reference", sa.String(length=100), nullable=False),
        sa.Column("total_amount", sa.Numeric(19, 4), nullable=False),
        sa.Column("period", sa.String(length=7), nullable=False),
        sa.Column("created_by", sa.Integer(), nullable=False),
        sa.Column("corrects_voucher_id", sa.Integer(), nullable=True),
        sa.Column("corrected_by_voucher_id", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["corrects_voucher_id"], ["vouchers.id"]),
        sa.ForeignKeyConstraint(["corrected_by_voucher_id"], ["vouchers.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("voucher_number"),
        sa.UniqueConstraint("corrects_voucher_id"),
        sa.UniqueConstraint("corrected_by_voucher_id"),
    )
    op.create_index("ix_vouchers_date", "vouchers", ["date"])
    op.create_index("ix_vouchers_period", "vouchers", ["period"])
    op.create_index("ix_vouchers_created_by", "vouchers", ["created_by"])

    op.create_table(
        "line_items",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("voucher_id", sa.Integer(), nullable=False),
        sa.Column("account_no", sa.Integer(), nullable=False),
        sa.Column("debit_amount", sa.Numeric(19, 4), nullable=False),
        sa.Column("credit_amount", sa.Numeric(19, 4), nullable=False),
        sa.Column("tax_code", sa.Integer(), nullable=False),
        sa.Column("project_id", sa.Integer(), nullable=True),
        sa.Column("cost_center_id", sa.Integer(), nullable=True),
        sa.CheckConstraint(
            "(debit_amount > 0 AND credit_amount = 0) "
            "OR (debit_amount = 0 AND credit_amount > 0)",
            name="ck_line_items_one_sided",
        ),
        sa.ForeignKeyConstraint(["account_no"], ["accounts.account_no"]),
        sa.ForeignKeyConstraint(["voucher_id"], ["vouchers.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_line_items_voucher_id", "line_items", ["voucher_id"])
    op.create_index("ix_line_items_account_no", "line_items", ["account_no"])

    sequences = op.create_table(
        "voucher_sequences",
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("next_value", sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint("name"),
    )
    op.bulk_insert(sequences, [{"name": "voucher_number", "next_value": 1}])


def downgrade() -> None:
    op.drop_table("voucher_sequences")
    op.drop_index("ix_line_items_account_no", table_name="line_items")
    op.drop_index("ix_line_items_voucher_id", table_name="line_items")
    op.drop_table("line_items")
    op.drop_index("ix_vouchers_created_by", table_name="vouchers")
    op.drop_index("ix_vouchers_period", table_name="vouchers")
    op.drop_index("ix_vouchers_date", table_name="vouchers")
    op.drop_table("vouchers")
    op.drop_index("ix_accounts_account_group", table_name="accounts")
    op.drop_table("accounts")
    sa.Enum(name="balance_side_enum").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="account_type_enum").drop(op.get_bind(), checkfirst=True)
