"""Tests for the startup orchestrator."""

from bundlehost.schemas.status import ServerState
from bundlehost.services import bundle_service
from bundlehost.services.startup_service import StartupOrchestrator

from conftest import PACK_FILES


def test_ensure_directories_creates_missing(settings):
    orchestrator = StartupOrchestrator(settings)

    orchestrator.ensure_directories()

    assert settings.source_dir.is_dir()
    assert settings.extracted_dir.is_dir()


def test_discover_archives_filters_and_sorts(settings, make_zip):
    make_zip('b.zip', {'x': b'1'})
    make_zip('A.ZIP', {'x': b'1'})
    (settings.source_dir / 'notes.txt').write_text('ignored')
    (settings.source_dir / 'folder.zip').mkdir()

    names = [p.name for p in StartupOrchestrator(settings).discover_archives()]

    assert names == ['A.ZIP', 'b.zip']


def test_run_without_archives(settings):
    orchestrator = StartupOrchestrator(settings)
    assert orchestrator.state == ServerState.initializing

    report = orchestrator.run()

    assert orchestrator.state == ServerState.ready
    assert report.processed == []
    assert report.failed == []
    assert report.finished_at >= report.started_at


def test_run_isolates_failures(settings, make_zip):
    make_zip('pack.zip', PACK_FILES)
    broken = settings.source_dir / 'broken.zip'
    broken.write_bytes(b'garbage')

    orchestrator = StartupOrchestrator(settings)
    report = orchestrator.run()

    assert orchestrator.state == ServerState.ready
    assert [p.instance_name for p in report.processed] == ['pack']
    assert report.processed[0].total_files == 2
    assert report.processed[0].total_size == 13
    assert [f.archive for f in report.failed] == ['broken.zip']
    assert (settings.extracted_dir / 'pack.json').exists()
    assert not (settings.extracted_dir / 'broken.json').exists()


def test_run_continues_after_unexpected_error(settings, make_zip, monkeypatch):
    make_zip('a.zip', {'x': b'1'})
    make_zip('b.zip', {'y': b'2'})
    real_process_bundle = bundle_service.process_bundle

    def failing_first(archive_path, settings):
        if archive_path.name == 'a.zip':
            raise RuntimeError('boom')
        return real_process_bundle(archive_path, settings)

    monkeypatch.setattr(bundle_service, 'process_bundle', failing_first)

    report = StartupOrchestrator(settings).run()

    assert [f.error for f in report.failed] == ['boom']
    assert [p.instance_name for p in report.processed] == ['b']
