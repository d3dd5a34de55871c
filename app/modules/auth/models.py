# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required - Supabase Auth handles:
# - User registration (auth.users table)
# - Password and OAuth (Google) sign-in
# - JWT access/refresh token issue and validation
# - Password hashing and security

"""
Supabase Auth provides:
- auth.sign_up() - Register new users
- auth.sign_in_with_password() - Authenticate users
- auth.sign_in_with_oauth() - Build the provider redirect URL
- auth.exchange_code_for_session() - Finish the OAuth redirect
- auth.refresh_session() - Trade a refresh token for a new session
- auth.get_user() - Get current user from JWT token
- auth.sign_out() - Logout users

On first sign-in the auth user is mirrored into the public users table
(see app.modules.users.models).
"""
