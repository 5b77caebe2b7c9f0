import asyncio
import os

from sqlalchemy import select, text

from concessionario.core.config import settings
from concessionario.core.database import AsyncSessionLocal, engine
from concessionario.core.security import hash_password
from concessionario.models import Amministratore, Base
from concessionario.services.database_service import movimento_delete_trigger_statements


async def seed_admin(email: str, password: str) -> None:
    async with AsyncSessionLocal() as db:
        result = await db.execute(
            select(Amministratore).where(Amministratore.email == email)
        )
        if result.scalar_one_or_none() is not None:
            print(f"Amministratore {email} già presente, nessuna modifica.")
            return
        db.add(Amministratore(email=email, password=hash_password(password), attivo=True))
        await db.commit()
        print(f"Amministratore {email} creato.")


async def reset():
    print("Connessione al database, eliminazione tabelle...")
    async with engine.begin() as conn:
        await conn.execute(text(f'CREATE SCHEMA IF NOT EXISTS "{settings.db_schema}"'))
        await conn.run_sync(Base.metadata.drop_all)
        print("Tabelle eliminate. Creazione nuove tabelle...")
        await conn.run_sync(Base.metadata.create_all)
        print("Installazione trigger after_movimento_delete...")
        for statement in movimento_delete_trigger_statements():
            await conn.execute(text(statement))
    print("Database resettato con successo!")

    email = os.environ.get("SEED_ADMIN_EMAIL")
    password = os.environ.get("SEED_ADMIN_PASSWORD")
    if email and password:
        await seed_admin(email, password)

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(reset())
