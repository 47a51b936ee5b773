# manage.py

from dotenv import load_dotenv
load_dotenv()

import asyncio
from typing import Optional

import typer
import uvicorn
from typing_extensions import Annotated

# CLI management untuk Procurement ERP Sync.
cli = typer.Typer(
    help="Manajemen CLI untuk Procurement ERP Sync."
)

# --- Database Commands ---

@cli.command()
def init_db():
    """
    Inisialisasi database dan membuat semua tabel.
    """
    # Import dependency di dalam fungsi agar tidak dieksekusi saat startup
    from procurement_sync.database import async_engine
    from procurement_sync.models import Base

    async def create_tables():
        async with async_engine.begin() as conn:
            typer.echo("Membuat semua tabel sesuai models...")
            await conn.run_sync(Base.metadata.create_all)
        typer.secho("Database berhasil diinisialisasi.", fg=typer.colors.GREEN)

    asyncio.run(create_tables())

# --- Sync Commands ---

@cli.command()
def sync(
    integration_id: Annotated[str, typer.Argument(help="ID integration ERP yang aktif.")],
    entity_type: Annotated[Optional[str], typer.Option(help="invoice atau purchase_order (untuk satu entity).")] = None,
    entity_id: Annotated[Optional[str], typer.Option(help="ID entity (untuk satu entity).")] = None,
    triggered_by: Annotated[str, typer.Option(help="Identitas pemanggil yang dicatat di sync log.")] = "cli",
):
    """
    Jalankan outbound sync ke ERP tanpa lewat HTTP.
    """
    from pydantic import ValidationError as PydanticValidationError
    from procurement_sync.config import settings
    from procurement_sync.database import AsyncSessionLocal
    from procurement_sync.schemas import SyncRequestSchema
    from procurement_sync.services import create_service_registry
    from procurement_sync.services.exceptions import SyncServiceException

    try:
        request = SyncRequestSchema(
            integration_id=integration_id,
            action='sync_entity' if entity_type or entity_id else 'sync_all',
            entity_type=entity_type,
            entity_id=entity_id,
        )
    except PydanticValidationError as e:
        typer.secho(f"Request tidak valid: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=2)

    async def run_sync():
        async with AsyncSessionLocal() as session:
            registry = create_service_registry(session, settings.model_dump(), current_user=triggered_by)
            return await registry.erp_sync_service.run(request, triggered_by=triggered_by)

    try:
        result = asyncio.run(run_sync())
    except SyncServiceException as e:
        typer.secho(f"Sync gagal: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    color = typer.colors.GREEN if result['failed'] == 0 else typer.colors.YELLOW
    typer.secho(f"Sync selesai: synced={result['synced']} failed={result['failed']}", fg=color)

# --- Server Commands ---

@cli.command()
def run(
    host: str = "127.0.0.1",
    port: int = 8000,
    reload: bool = True
):
    """
    Menjalankan development server Uvicorn.
    """
    typer.echo(f"Menjalankan server di http://{host}:{port}")
    uvicorn.run("main:app", host=host, port=port, reload=reload, factory=True)


if __name__ == "__main__":
    cli()
