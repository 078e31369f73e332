import argparse
import os
import sys
from pathlib import Path

import uvicorn

from bundlehost.core.config import ServerSettings
from bundlehost.core.logger import console, set_debug_mode, set_log_level
from bundlehost.main import create_app
from bundlehost.services.startup_service import StartupOrchestrator


def load_settings(args) -> ServerSettings:
    """Environment settings, overridden by any command line option given."""
    settings = ServerSettings.from_env()
    overrides = {}
    if args.host:
        overrides["host"] = args.host
    if args.port:
        overrides["port"] = args.port
        if not args.base_url and not os.getenv("PUBLIC_BASE_URL"):
            overrides["public_base_url"] = f"http://localhost:{args.port}"
    if args.source_dir:
        overrides["source_dir"] = Path(args.source_dir)
    if args.extracted_dir:
        overrides["extracted_dir"] = Path(args.extracted_dir)
    if args.base_url:
        overrides["public_base_url"] = args.base_url
    if args.debug:
        overrides["log_level"] = "DEBUG"
    return settings.model_copy(update=overrides)


def cmd_serve(args):
    settings = load_settings(args)
    if args.wait_for_startup:
        settings = settings.model_copy(update={"serve_during_startup": False})
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


def cmd_process(args):
    settings = load_settings(args)
    set_log_level(settings.log_level)
    report = StartupOrchestrator(settings).run()
    console.print_json(report.model_dump_json())
    if report.failed:
        sys.exit(1)


def main(argv=None):
    parser = argparse.ArgumentParser(prog="bundlehost", description="Serve instance bundles and their manifests")
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--host", help="Listen address")
    common.add_argument("--port", type=int, help="Listen port")
    common.add_argument("--source-dir", help="Directory containing *.zip bundles")
    common.add_argument("--extracted-dir", help="Directory receiving extracted bundles and manifests")
    common.add_argument("--base-url", help="Public base URL used in manifest download URLs")
    common.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)
    serve = subparsers.add_parser("serve", parents=[common], help="Process bundles and serve them over HTTP")
    serve.add_argument("--wait-for-startup", action="store_true",
                       help="Finish processing every bundle before accepting requests")
    serve.set_defaults(func=cmd_serve)
    subparsers.add_parser("process", parents=[common], help="Process bundles once and exit").set_defaults(func=cmd_process)

    args = parser.parse_args(argv)
    if args.debug:
        set_debug_mode(True)
    args.func(args)


if __name__ == "__main__":
    main()
