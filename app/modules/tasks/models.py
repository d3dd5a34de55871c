# Supabase table: tasks
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

tasks:
- id: uuid (primary key)
- household_id: uuid (foreign key to households.id, not null)
- title: text (not null)
- description: text (nullable)
- due_date: date (nullable)
- completed: boolean (not null, default: false)
- assigned_to_id: uuid (foreign key to users.id, nullable)
- priority: text (nullable) - e.g. low, medium, high
- status: text (nullable) - free-form, e.g. todo, in_progress
- created_by: uuid (foreign key to users.id, nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

Any household member may create, edit, complete, assign or delete a task.
Concurrent edits are last-write-wins.
"""
