from fastapi import Request
from bundlehost.core.config import ServerSettings
from bundlehost.services.startup_service import StartupOrchestrator

def get_settings(request: Request) -> ServerSettings:
  return request.app.state.settings

def get_orchestrator(request: Request) -> StartupOrchestrator:
  return request.app.state.orchestrator
