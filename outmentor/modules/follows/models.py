# Supabase table: followers
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
#
# Migration: alter table followers add constraint followers_pair_key unique (follower_id, following_id);
#            alter table followers add constraint followers_no_self check (follower_id <> following_id);

"""
Expected Supabase table structure:
- id: uuid (primary key)
- follower_id: uuid (foreign key to profiles.id on delete cascade, not null)
- following_id: uuid (foreign key to profiles.id on delete cascade, not null)
- created_at: timestamp (default: now())

Unique: (follower_id, following_id). An edge is directed and independent of
role; mentors may follow mentors, teams may follow mentors, and so on.
"""
