# Supabase tables: profiles, mentor_details, team_details
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, references auth.users.id)
- email: text (nullable) - synced from auth.users at registration
- role: text (nullable, check role in ('mentor', 'team')) - set once at registration;
  NULL only for staff accounts created by the seed script
- full_name: text (nullable)
- region: text (nullable) - free text as typed by the member, see core/regions.py
- city: text (nullable)
- bio: text (nullable)
- avatar_url: text (nullable)
- gravatar_url: text (nullable)
- linkedin_url: text (nullable)
- is_admin: boolean (default: false)
- is_mentor_verified: boolean (default: false)
- last_avatar_checked: timestamp (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

mentor_details:
- profile_id: uuid (primary key, references profiles.id on delete cascade)
- mentor_ftc: boolean (default: false)
- mentor_fll: boolean (default: false)
- knowledge_areas: text[] (default: '{}')

team_details:
- profile_id: uuid (primary key, references profiles.id on delete cascade)
- team_number: text (nullable)
- team_type: text (nullable, check team_type in ('FTC', 'FLL'))
- interest_areas: text[] (default: '{}')

Deleting a profile row cascades to connections, followers, reports and
meetings. The auth.users row is not removed (requires the service role key).
"""
