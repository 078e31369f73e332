from contextlib import asynccontextmanager

import anyio
from fastapi import FastAPI

from bundlehost.core.config import ServerSettings
from bundlehost.core.logger import set_log_level, setup_logger
from bundlehost.routers.download import router as download_router
from bundlehost.routers.instances import router as instances_router
from bundlehost.routers.status import router as status_router
from bundlehost.schemas.status import ServerState
from bundlehost.services.startup_service import StartupOrchestrator

logger = setup_logger("server")


async def run_startup(orchestrator: StartupOrchestrator) -> None:
  """Run bundle processing in a worker thread so the event loop stays free."""
  try:
    await anyio.to_thread.run_sync(orchestrator.run)
  except Exception:
    logger.exception("Startup processing aborted")
    orchestrator.state = ServerState.ready


def create_app(settings: ServerSettings | None = None) -> FastAPI:
  settings = settings or ServerSettings.from_env()
  set_log_level(settings.log_level)
  orchestrator = StartupOrchestrator(settings)

  @asynccontextmanager
  async def lifespan(app: FastAPI):
    logger.info(f"Serving instances on {settings.public_base_url}")
    if not settings.serve_during_startup:
      await run_startup(orchestrator)
      yield
      return

    # Requests for bundles that are not processed yet get 404 meanwhile
    async with anyio.create_task_group() as tg:
      tg.start_soon(run_startup, orchestrator)
      yield
      tg.cancel_scope.cancel()

  app = FastAPI(title="BundleHost", version="0.1.0", lifespan=lifespan)
  app.state.settings = settings
  app.state.orchestrator = orchestrator

  app.include_router(status_router, tags=["status"])
  app.include_router(instances_router, prefix="/instances", tags=["instances"])
  app.include_router(download_router, prefix="/download", tags=["download"])
  return app
