"""
Startup Service - Process every source archive before (or while) serving
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import List

from bundlehost.core.config import ARCHIVE_SUFFIX, ServerSettings
from bundlehost.core.logger import setup_logger
from bundlehost.schemas.status import FailedBundle, ProcessedBundle, ServerState, StartupReport
from bundlehost.services import bundle_service, manifest_service

logger = setup_logger("startup")


class StartupOrchestrator:
    """
    Runs the initialization phase: directory setup, then one bundle at a time.

    ``state`` moves from ``initializing`` to ``ready`` once every archive has
    been attempted, whether or not all of them succeeded.
    """

    def __init__(self, settings: ServerSettings):
        self.settings = settings
        self.state = ServerState.initializing
        self.report = StartupReport()

    def ensure_directories(self) -> None:
        for directory in (self.settings.source_dir, self.settings.extracted_dir):
            if not directory.exists():
                logger.info(f"Creating directory {directory}")
            directory.mkdir(parents=True, exist_ok=True)

    def discover_archives(self) -> List[Path]:
        """Archives in the source directory, sorted by file name."""
        return sorted(
            (p for p in self.settings.source_dir.iterdir()
             if p.is_file() and p.suffix.lower() == ARCHIVE_SUFFIX),
            key=lambda p: p.name,
        )

    def run(self) -> StartupReport:
        self.state = ServerState.initializing
        self.report = StartupReport(started_at=datetime.now(timezone.utc))

        self.ensure_directories()
        archives = self.discover_archives()
        logger.info(f"Found {len(archives)} archive(s) in {self.settings.source_dir}")

        for archive_path in archives:
            try:
                manifest = bundle_service.process_bundle(archive_path, self.settings)
            except Exception as e:
                # One broken bundle must not stop the others
                logger.exception(f"Failed to process {archive_path.name}: {e}")
                self.report.failed.append(FailedBundle(archive=archive_path.name, error=str(e)))
                continue

            self.report.processed.append(ProcessedBundle(
                instance_name=bundle_service.instance_name_for(archive_path),
                archive=archive_path.name,
                total_files=len(manifest),
                total_size=manifest_service.manifest_total_size(manifest),
            ))

        self.report.finished_at = datetime.now(timezone.utc)
        self.state = ServerState.ready
        logger.info(
            f"Startup finished: {len(self.report.processed)} processed, "
            f"{len(self.report.failed)} failed"
        )
        return self.report
