from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from enum import Enum


class ServerState(str, Enum):
  initializing = "initializing"
  ready = "ready"


class ProcessedBundle(BaseModel):
  instance_name: str
  archive: str
  total_files: int
  total_size: int


class FailedBundle(BaseModel):
  archive: str
  error: str


class StartupReport(BaseModel):
  started_at: Optional[datetime] = None
  finished_at: Optional[datetime] = None
  processed: List[ProcessedBundle] = Field(default_factory=list)
  failed: List[FailedBundle] = Field(default_factory=list)


class StatusResponse(BaseModel):
  state: ServerState
  hash_algorithm: str
  report: StartupReport


class InstanceListResponse(BaseModel):
  items: List[str]
  total: int
