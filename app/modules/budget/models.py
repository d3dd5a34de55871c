# Supabase tables: budgets, transactions
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

budgets:
- id: uuid (primary key)
- household_id: uuid (foreign key to households.id, not null)
- name: text (not null)
- start_date: date (not null)
- end_date: date (not null)
- total_amount: numeric (not null, >= 0)
- created_by: uuid (foreign key to users.id, nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

transactions:
- id: uuid (primary key)
- household_id: uuid (foreign key to households.id, not null)
- type: text (not null) - values: bill, contribution
- amount: numeric (not null, > 0)
- description: text (nullable)
- created_by: uuid (foreign key to users.id, not null)
- created_at: timestamp (default: now())

Older rows may carry the type in a transaction_type column, and may use
'expense' for a bill; both are read as bills (see service.normalize_transaction_type).

The active budget is the one whose [start_date, end_date] contains today.
Only one active budget per household is expected but nothing enforces it.
"""
