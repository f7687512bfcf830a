# Supabase Auth
# Identity is delegated to Supabase's built-in authentication system.
# Supabase Auth handles:
# - Member registration (auth.users table)
# - Login and session management
# - JWT token issuance and validation

"""
Supabase Auth provides:
- auth.sign_up() - Register new members
- auth.sign_in_with_password() - Authenticate members
- auth.get_user() - Resolve the member behind a JWT
- auth.admin.sign_out(jwt) - Logout with the service role key, also forced after members delete their own profile
- auth.admin.create_user() - Used by scripts/seed_admin.py with the service role key

Everything else about a member (role, region, admin flag) lives in the
profiles table, keyed by the auth user id; see modules/profiles/models.py.
"""
