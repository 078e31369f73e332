from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import FileResponse
from bundlehost.core.config import ServerSettings
from bundlehost.core.errors import InstanceNotFoundError, UnsafePathError
from bundlehost.dependencies import get_settings
from bundlehost.services import instance_service

router = APIRouter()


@router.get("/{instance_name}/{file_path:path}")
def download_file(instance_name: str, file_path: str, settings: ServerSettings = Depends(get_settings)):
  """Download one file of an extracted instance."""
  try:
    absolute_path = instance_service.resolve_download_path(settings.extracted_dir, instance_name, file_path)
  except UnsafePathError as e:
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
  except InstanceNotFoundError as e:
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

  return FileResponse(absolute_path, filename=absolute_path.name, media_type="application/octet-stream")
