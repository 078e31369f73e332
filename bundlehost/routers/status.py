from fastapi import APIRouter, Depends
from bundlehost.core.config import HASH_ALGORITHM
from bundlehost.dependencies import get_orchestrator
from bundlehost.schemas.status import StatusResponse
from bundlehost.services.startup_service import StartupOrchestrator

router = APIRouter()


@router.get("/status", response_model=StatusResponse)
def get_status(orchestrator: StartupOrchestrator = Depends(get_orchestrator)):
  """Lifecycle state and the outcome of startup processing."""
  return StatusResponse(
    state=orchestrator.state,
    hash_algorithm=HASH_ALGORITHM,
    report=orchestrator.report,
  )
