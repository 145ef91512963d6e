#!/usr/bin/env python3
"""Check the reading tables exist, printing the DDL for any that are missing."""
import sys
sys.path.insert(0, '.')

from app.db.supabase_client import get_supabase

READING_HISTORY_SQL = """
CREATE TABLE IF NOT EXISTS reading_history (
    history_id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    user_id TEXT NOT NULL,
    book_name TEXT NOT NULL,
    current_page INTEGER NOT NULL DEFAULT 1 CHECK (current_page >= 1),
    total_pages INTEGER NOT NULL DEFAULT 0,
    last_read_at TIMESTAMPTZ NOT NULL DEFAULT now(),
    created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
    UNIQUE (user_id, book_name)
);
"""

READING_SETTINGS_SQL = """
CREATE TABLE IF NOT EXISTS reading_settings (
    settings_id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    user_id TEXT NOT NULL UNIQUE,
    reading_mode TEXT NOT NULL DEFAULT 'paragraphs'
        CHECK (reading_mode IN ('fullpage', 'paragraphs', 'sentences')),
    reading_amount INTEGER NOT NULL DEFAULT 3 CHECK (reading_amount >= 1),
    created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
    updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
);
"""

TABLES = {
    "reading_history": ("user_id, book_name, current_page, total_pages, last_read_at", READING_HISTORY_SQL),
    "reading_settings": ("user_id, reading_mode, reading_amount, updated_at", READING_SETTINGS_SQL),
}


def run_migration():
    supabase = get_supabase()
    missing = []

    for table, (columns, sql) in TABLES.items():
        print(f"🔍 Checking {table}...")
        try:
            supabase.table(table).select(columns).limit(1).execute()
            print(f"✅ {table} is ready")
        except Exception as e:
            print(f"❌ {table} check failed: {e}")
            missing.append(sql)

    if missing:
        print("💡 Run this SQL in your Supabase SQL editor:")
        for sql in missing:
            print(sql)
        sys.exit(1)


if __name__ == "__main__":
    run_migration()
