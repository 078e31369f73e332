"""
Instances Router - Manifests of processed bundles
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from bundlehost.core.config import ServerSettings
from bundlehost.core.errors import InstanceNotFoundError, UnsafePathError
from bundlehost.dependencies import get_settings
from bundlehost.schemas.status import InstanceListResponse
from bundlehost.services import instance_service

router = APIRouter()


@router.get("", response_model=InstanceListResponse)
def list_instances(settings: ServerSettings = Depends(get_settings)):
  items = instance_service.list_instances(settings.extracted_dir)
  return InstanceListResponse(items=items, total=len(items))


@router.get("/{instance_name}")
def get_instance_manifest(instance_name: str, settings: ServerSettings = Depends(get_settings)):
  """
  Manifest of one instance.

  The launcher compares it with its local files and downloads what differs.

  Returns:
      [{"url": "...", "size": 10, "hash": "<sha1>", "path": "mods/a.jar"}, ...]
  """
  try:
    return instance_service.get_manifest(settings.extracted_dir, instance_name)
  except (InstanceNotFoundError, UnsafePathError):
    # Unprocessed or failed bundles are an expected condition
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "Instance not found"})
