"""
Migration: Add delivery tracking columns to projects table.

delivery_method, tracking_number and proof_of_service record how a notice
went out and the evidence that it arrived.
"""
from sqlalchemy import create_engine, text
import os

DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"postgresql://{os.getenv('USER', 'postgres')}@localhost:5432/prelimpro"
)

def run_migration():
    """Add delivery columns (and the deliverymethod enum) to projects."""
    engine = create_engine(DATABASE_URL)

    with engine.connect() as conn:
        conn.execute(text("""
            DO $$ BEGIN
                CREATE TYPE deliverymethod AS ENUM ('EMAIL', 'ESIGN', 'MAIL');
            EXCEPTION
                WHEN duplicate_object THEN null;
            END $$;
        """))

        for column, column_type in (
            ("delivery_method", "deliverymethod"),
            ("tracking_number", "VARCHAR(100)"),
            ("proof_of_service", "TEXT"),
        ):
            result = conn.execute(text("""
                SELECT column_name
                FROM information_schema.columns
                WHERE table_name = 'projects' AND column_name = :column
            """), {"column": column})

            if result.fetchone():
                print(f"{column} column already exists")
            else:
                conn.execute(text(f"ALTER TABLE projects ADD COLUMN {column} {column_type}"))
                print(f"Added {column} column to projects table")

        conn.commit()

if __name__ == "__main__":
    run_migration()
