from __future__ import annotations

SCHEMA_STATEMENTS = [
    "CREATE CONSTRAINT business_id_unique IF NOT EXISTS FOR (b:Business) REQUIRE b.business_id IS UNIQUE",
    "CREATE INDEX person_phone IF NOT EXISTS FOR (p:Person) ON (p.phone)",
    "CREATE INDEX person_user_id IF NOT EXISTS FOR (p:Person) ON (p.user_id)",
]
