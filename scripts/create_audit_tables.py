# scripts/create_audit_tables.py
import sys
from pathlib import Path

# Ensure project root is on the path when running this script directly
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import asyncio
from reviewhub.infrastructure.database import models  # noqa: F401  registers AuditEntry
from reviewhub.infrastructure.database.session import Base, get_engine

async def create_tables():
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print("Created tables:", ", ".join(sorted(Base.metadata.tables)))

asyncio.run(create_tables())
