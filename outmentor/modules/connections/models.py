# Supabase table: connections
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
#
# Migration: alter table connections add constraint connections_pair_key unique (mentor_id, team_id);
# Required by the insert-if-absent upsert in ConnectionService.create_connection.

"""
Expected Supabase table structure:
- id: uuid (primary key)
- mentor_id: uuid (foreign key to profiles.id on delete cascade, not null) - profile with role 'mentor'
- team_id: uuid (foreign key to profiles.id on delete cascade, not null) - profile with role 'team'
- status: text (not null, default: 'accepted') - no pending/approval phase exists
- created_at: timestamp (default: now())

Unique: (mentor_id, team_id)
"""
