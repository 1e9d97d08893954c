"""Database store layer - provides persistence for the application.

This module re-exports all public database functions for easy importing.
"""

# Re-export schema functions
# Re-export all query functions
from shopledger.store.queries import (
    build_payment_filter,
    delete_payment,
    get_payment,
    insert_note,
    insert_payment,
    query_all_daily_earnings,
    query_daily_earning,
    query_notes,
    query_payments,
    update_payment,
    upsert_daily_earning,
)
from shopledger.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Queries
    "build_payment_filter",
    "delete_payment",
    "get_payment",
    "insert_note",
    "insert_payment",
    "query_all_daily_earnings",
    "query_daily_earning",
    "query_notes",
    "query_payments",
    "update_payment",
    "upsert_daily_earning",
]
