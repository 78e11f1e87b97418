"""
Migration: Add company profile columns to users table.

The company profile fills the claimant block of generated notices
(company name, address, phone, email, license number, logo).
"""
from sqlalchemy import create_engine, text
import os

DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"postgresql://{os.getenv('USER', 'postgres')}@localhost:5432/prelimpro"
)

PROFILE_COLUMNS = [
    ("business_name", "VARCHAR(255)"),
    ("company_name", "VARCHAR(255)"),
    ("company_address", "VARCHAR(500)"),
    ("phone", "VARCHAR(30)"),
    ("company_email", "VARCHAR(255)"),
    ("tax_id", "VARCHAR(50)"),
    ("website", "VARCHAR(255)"),
    ("license_number", "VARCHAR(100)"),
    ("logo_url", "VARCHAR(500)"),
]


def run_migration():
    """Add any missing company profile columns to users."""
    engine = create_engine(DATABASE_URL)

    with engine.connect() as conn:
        for column, column_type in PROFILE_COLUMNS:
            result = conn.execute(text("""
                SELECT column_name
                FROM information_schema.columns
                WHERE table_name = 'users' AND column_name = :column
            """), {"column": column})

            if result.fetchone():
                print(f"{column} column already exists")
            else:
                conn.execute(text(f"ALTER TABLE users ADD COLUMN {column} {column_type}"))
                print(f"Added {column} column to users table")

        conn.commit()

if __name__ == "__main__":
    run_migration()
