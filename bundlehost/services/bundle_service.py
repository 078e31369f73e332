"""
Bundle Service - Unpack one instance archive and persist its manifest
"""

import shutil
import uuid
import zipfile
import zlib
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import List

from bundlehost.core.config import ServerSettings
from bundlehost.core.errors import ArchiveCorruptError
from bundlehost.core.logger import setup_logger
from bundlehost.schemas.manifest import FileDescriptor, manifest_adapter
from bundlehost.services import manifest_service
from bundlehost.utils import json_storage

logger = setup_logger("bundle")

# Errors zipfile raises for damaged or unsupported archives
_ZIP_ERRORS = (zipfile.BadZipFile, zlib.error, EOFError, NotImplementedError, RuntimeError)


def instance_name_for(archive_path: Path) -> str:
  """Instance name of an archive: its file name without the extension."""
  return Path(archive_path).stem


def manifest_path_for(extracted_dir: Path, instance_name: str) -> Path:
  return Path(extracted_dir) / f"{instance_name}.json"


def _check_member(archive_path: Path, member_name: str) -> None:
  """Reject member names that would land outside the extraction directory."""
  member = PurePosixPath(member_name.replace("\\", "/"))
  if member.is_absolute() or ".." in member.parts or PureWindowsPath(member_name).drive:
    raise ArchiveCorruptError(archive_path, f"unsafe member path '{member_name}'")


def extract_archive(archive_path: Path, destination: Path) -> None:
  """
  Extract an archive and replace ``destination`` with its contents.

  The archive is unpacked into a staging directory beside the destination
  first. The staging tree is swapped into place only after a complete
  extraction, so a failure leaves the previous tree (if any) untouched.

  Args:
      archive_path: Zip file to unpack. Never modified.
      destination: Directory that will hold exactly the archive's files.

  Raises:
      ArchiveCorruptError: If the archive cannot be read or contains unsafe paths.
      OSError: If writing the extracted files fails.
  """
  destination = Path(destination)
  destination.parent.mkdir(parents=True, exist_ok=True)
  staging = destination.with_name(f".{destination.name}.{uuid.uuid4().hex[:8]}.staging")

  try:
    staging.mkdir()
    with zipfile.ZipFile(archive_path) as zip_ref:
      for member_name in zip_ref.namelist():
        _check_member(archive_path, member_name)
      zip_ref.extractall(staging)
  except _ZIP_ERRORS as e:
    shutil.rmtree(staging, ignore_errors=True)
    raise ArchiveCorruptError(archive_path, str(e) or type(e).__name__) from e
  except BaseException:
    shutil.rmtree(staging, ignore_errors=True)
    raise

  if destination.exists():
    old = destination.with_name(f".{destination.name}.{uuid.uuid4().hex[:8]}.old")
    destination.rename(old)
    staging.rename(destination)
    shutil.rmtree(old)
  else:
    staging.rename(destination)


def process_bundle(archive_path: Path, settings: ServerSettings) -> List[FileDescriptor]:
  """
  Unpack an instance archive, build its manifest and persist it.

  Args:
      archive_path: Source archive.
      settings: Provides the extraction directory and public base URL.

  Returns:
      List[FileDescriptor]: The persisted manifest.

  Raises:
      ArchiveCorruptError: If the archive cannot be extracted.
      OSError: If hashing, listing or writing fails.
  """
  archive_path = Path(archive_path)
  instance_name = instance_name_for(archive_path)
  output_dir = settings.extracted_dir / instance_name
  manifest_path = manifest_path_for(settings.extracted_dir, instance_name)

  logger.info(f"Processing instance '{instance_name}' from {archive_path.name}")

  # A stale manifest must not be served while its tree is being replaced
  manifest_path.unlink(missing_ok=True)

  extract_archive(archive_path, output_dir)
  manifest = manifest_service.build_manifest(output_dir, instance_name, settings.public_base_url)
  json_storage.write_json(manifest_path, manifest_adapter.dump_python(manifest, mode="json"))

  logger.info(
    f"Instance '{instance_name}' processed: {len(manifest)} files, "
    f"{manifest_service.manifest_total_size(manifest)} bytes. Manifest at {manifest_path}"
  )
  return manifest
