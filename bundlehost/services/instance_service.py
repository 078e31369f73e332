"""
Instance Service - Read-only access to processed bundles for the HTTP layer
"""

from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import List

from bundlehost.core.errors import InstanceNotFoundError, UnsafePathError
from bundlehost.services.bundle_service import manifest_path_for
from bundlehost.utils import json_storage


def _check_segment(value: str, what: str) -> None:
  if not value:
    raise UnsafePathError(f"Empty {what}")
  normalized = value.replace("\\", "/")
  if PurePosixPath(normalized).is_absolute() or PureWindowsPath(value).drive:
    raise UnsafePathError(f"Absolute {what} is not allowed")
  if ".." in normalized.split("/"):
    raise UnsafePathError(f"Parent directory segments are not allowed in {what}")


def get_manifest(extracted_dir: Path, instance_name: str) -> list:
  """
  Load the persisted manifest of an instance.

  Raises:
      UnsafePathError: If the instance name is not a plain name.
      InstanceNotFoundError: If no manifest has been persisted for it.
  """
  _check_segment(instance_name, "instance name")
  if "/" in instance_name.replace("\\", "/"):
    raise UnsafePathError("Instance name must not contain path separators")

  manifest_path = manifest_path_for(extracted_dir, instance_name)
  try:
    return json_storage.read_json(manifest_path)
  except FileNotFoundError:
    raise InstanceNotFoundError(f"Instance '{instance_name}' not found")


def list_instances(extracted_dir: Path) -> List[str]:
  """Names of instances whose manifest has been persisted."""
  if not extracted_dir.is_dir():
    return []
  return sorted(p.stem for p in extracted_dir.glob("*.json") if p.is_file())


def resolve_download_path(extracted_dir: Path, instance_name: str, file_path: str) -> Path:
  """
  Absolute path of a file listed in an instance's persisted manifest.

  Files of an instance are only served once its manifest is written, and
  only the files that manifest lists. Trees of failed, in-progress or
  staging extractions are therefore never reachable.

  Raises:
      UnsafePathError: If the request would leave the instance root.
      InstanceNotFoundError: If the instance has no manifest, or the file is
          not listed in it or is not a regular file.
  """
  _check_segment(instance_name, "instance name")
  _check_segment(file_path, "file path")

  manifest = get_manifest(extracted_dir, instance_name)
  if not any(entry.get("path") == file_path for entry in manifest):
    raise InstanceNotFoundError(f"File '{file_path}' not found in instance '{instance_name}'")

  instance_root = (Path(extracted_dir) / instance_name).resolve()
  target_path = (instance_root / file_path).resolve()

  # Security check to prevent path traversal (symlinks included)
  try:
    target_path.relative_to(instance_root)
  except ValueError:
    raise UnsafePathError("Requested path is outside the instance root")

  if not target_path.is_file():
    raise InstanceNotFoundError(f"File '{file_path}' not found in instance '{instance_name}'")

  return target_path
