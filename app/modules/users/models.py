# Supabase tables: users, auth.users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

users:
- id: uuid (primary key, references auth.users.id)
- email: text (not null) - copied from auth.users on first sign-in
- full_name: text (nullable) - set during onboarding
- onboard_success: boolean (not null, default: false)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

Note: rows are mirrored from auth.users the first time a user signs in
(see UserService.ensure_profile). Credentials stay in auth.users.
"""
