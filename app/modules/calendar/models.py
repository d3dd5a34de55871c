# Supabase table: calendar_events (tasks are read from the tasks module)
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

calendar_events:
- id: uuid (primary key)
- household_id: uuid (foreign key to households.id, not null)
- title: text (not null)
- event_date: timestamp (not null)
- event_location: text (nullable)
- created_by: uuid (foreign key to users.id, not null)
- created_at: timestamp (default: now())
"""
