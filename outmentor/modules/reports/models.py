# Supabase table: reports
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- reporter_id: uuid (foreign key to profiles.id on delete cascade, not null)
- reported_profile_id: uuid (foreign key to profiles.id on delete cascade, not null)
- reason: text (not null) - Spam | Abuse | IncorrectInfo | Other
  (rows written by the legacy web form may hold "Abuso", "Informação incorreta", "Outro")
- details: text (nullable)
- status: text (not null, default: 'pending') - values: pending, resolved, rejected
- resolver_id: uuid (foreign key to profiles.id, nullable) - administrator who decided
- created_at: timestamp (default: now())
- resolved_at: timestamp (nullable)

Check: reporter_id <> reported_profile_id
"""
