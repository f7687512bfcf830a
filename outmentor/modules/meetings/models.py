# Supabase table: meetings
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- connection_id: uuid (foreign key to connections.id on delete cascade, not null)
- title: text (not null)
- scheduled_at: timestamp (not null)
- meet_link: text (not null) - generated by the video provider, stored as-is
- created_at: timestamp (default: now())
"""
