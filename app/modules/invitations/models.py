# Supabase table: invitations
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

invitations:
- id: uuid (primary key)
- household_id: uuid (foreign key to households.id, not null)
- invitee_email: text (not null) - stored lower-cased
- inviter_id: uuid (foreign key to users.id, not null)
- status: text (not null, default: 'pending') - values: pending, accepted, declined
- created_at: timestamp (default: now())
"""
