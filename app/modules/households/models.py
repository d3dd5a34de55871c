# Supabase tables: households, household_members
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

households:
- id: uuid (primary key)
- name: text (not null)
- created_by: uuid (foreign key to users.id, not null)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

household_members:
- id: uuid (primary key)
- household_id: uuid (foreign key to households.id, not null)
- user_id: uuid (foreign key to users.id, not null)
- role: text (not null, default: 'member') - values: owner, member
- created_at: timestamp (default: now())

A user is expected to belong to one household; when several membership rows
exist the first one returned is used.
"""
