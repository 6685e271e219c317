# file: numan/cli.py
# numan command line interface
# Uploads .nupkg archives and tracks the newest version per directory

import argparse
import asyncio
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from numan import __version__
from numan.config import Settings, get_settings
from numan.exceptions import (
    ConfigCorruptError,
    DirectoryUnreadableError,
    InputValidationError,
    MalformedVersionError,
    NumanError,
    UploadTransportError,
)
from numan.models import Configuration, PackageRecord, parse_archive_name
from numan.registry_client import RegistryClient, UploadResult
from numan.scanner import ArchiveEntry, find_newest
from numan.store import ConfigStore
from numan.utils.cli_printing import (
    print_box_footer, print_box_header, print_status, print_table_header, print_table_row
)
from numan.utils.tb_logger import get_logger, setup_logging

COMMANDS = ("upload", "auth", "logout", "showcfg", "check", "publish")

# options followed by a separate value token
_VALUE_OPTIONS = {"-k", "--key", "-r", "--registry-url"}

EXIT_OK = 0
EXIT_MISSING_FILE = 1
EXIT_NOT_A_FILE = 2
EXIT_WRONG_EXTENSION = 3
EXIT_NO_API_KEY = 4
EXIT_INTERRUPTED = 130


@dataclass
class UpdateCandidate:
    """A remembered package with a newer archive on disk."""
    record: PackageRecord
    newest: ArchiveEntry


# ==================== Helpers ====================

def validate_archive(path: str, extension: str) -> Path:
    """Check that ``path`` names an existing archive file."""
    package = Path(path)
    if not package.exists():
        raise InputValidationError(f"File {path} does not exist", exit_code=EXIT_MISSING_FILE)
    if not package.is_file():
        raise InputValidationError(f"{path} is not a file", exit_code=EXIT_NOT_A_FILE)
    if not path.endswith(extension):
        raise InputValidationError("Invalid file: it is not nuget package", exit_code=EXIT_WRONG_EXTENSION)
    return package


def resolve_api_key(flag_key: Optional[str], config: Configuration) -> str:
    """The ``--key`` flag wins over the stored key."""
    if flag_key:
        return flag_key
    if config.api_key:
        return config.api_key
    raise InputValidationError("Api key is not defined! Use -k [key]", exit_code=EXIT_NO_API_KEY)


def mask_key(key: str) -> str:
    if len(key) <= 8:
        return "*" * len(key)
    return f"{key[:4]}{'*' * (len(key) - 8)}{key[-4:]}"


def create_client(settings: Settings) -> RegistryClient:
    return RegistryClient(
        registry_url=settings.registry_url,
        client_version=settings.client_version,
        timeout=settings.upload_timeout,
    )


def report_response(result: UploadResult) -> None:
    status = f"{result.status_code} {result.reason}".strip()
    print_status(f"Response: [{status}] {result.body}", "success" if result.success else "error")


def collect_updates(config: Configuration, extension: str) -> List[UpdateCandidate]:
    """
    Compare every remembered package with the newest archive in its directory.

    Prints one line per package and returns the packages with a newer archive.
    Unreadable directories are reported and skipped.
    """
    logger = get_logger()
    updates: List[UpdateCandidate] = []

    for record in config.packages:
        try:
            newest = find_newest(record.path, extension)
        except DirectoryUnreadableError as e:
            logger.warning(e.message)
            print_status(f"{record.key}: {e.message}", "error")
            continue

        if newest is not None and newest.version > record.version:
            print_status(f"{record.key}: {record.version} -> {newest.version} ({newest.file_name})", "update")
            updates.append(UpdateCandidate(record=record, newest=newest))
        else:
            print_status(f"{record.key}: Latest ({record.version})", "success")

    return updates


def print_summary(count: int) -> None:
    if count:
        print_status(f"{count} package(s) with newer versions", "info")
    else:
        print_status("No newer versions found", "info")


# ==================== Commands ====================

async def cmd_upload(args, settings: Settings, store: ConfigStore) -> int:
    """Upload a single archive and remember its version."""
    package = validate_archive(args.path, settings.archive_extension)

    if not args.overlook:
        # fail on a versionless name before anything is sent
        try:
            parse_archive_name(package.name)
        except MalformedVersionError as e:
            raise InputValidationError(e.message, exit_code=EXIT_WRONG_EXTENSION) from e

    config = store.load()
    api_key = resolve_api_key(args.key, config)

    async with create_client(settings) as client:
        try:
            result = await client.upload(package, api_key)
        except UploadTransportError as e:
            print_status(f"Error: {e.message}", "error")
            return EXIT_OK

    report_response(result)

    if result.success and not args.overlook:
        if store.remember_or_update(config, package):
            store.save(config)
    return EXIT_OK


async def cmd_auth(args, settings: Settings, store: ConfigStore) -> int:
    """Remember the api key."""
    print_status(f"Authenticating... {mask_key(args.key)}", "configure")
    config = store.load()
    config.api_key = args.key
    store.save(config)
    print_status("Api key saved", "success")
    return EXIT_OK


async def cmd_logout(args, settings: Settings, store: ConfigStore) -> int:
    """Forget the api key."""
    config = store.load()
    config.api_key = None
    store.save(config)
    print_status("Logged out successfully", "success")
    return EXIT_OK


async def cmd_showcfg(args, settings: Settings, store: ConfigStore) -> int:
    """Print the configuration file verbatim."""
    raw = store.read_raw()
    print(raw if raw is not None else "Not configured yet")
    return EXIT_OK


async def cmd_check(args, settings: Settings, store: ConfigStore) -> int:
    """Report remembered packages with newer archives."""
    print_box_header("Package Check", "🔍")
    print_box_footer()

    config = store.load()
    updates = collect_updates(config, settings.archive_extension)
    print_summary(len(updates))
    return EXIT_OK


async def cmd_publish(args, settings: Settings, store: ConfigStore) -> int:
    """Upload the newest archive of every package that has one."""
    print_box_header("Publish Packages", "📦")
    print_box_footer()

    config = store.load()
    updates = collect_updates(config, settings.archive_extension)
    print_summary(len(updates))
    if not updates:
        return EXIT_OK

    api_key = resolve_api_key(args.key, config)
    changed = False
    published = 0

    async with create_client(settings) as client:
        for candidate in updates:
            try:
                result = await client.upload(candidate.newest.file_path, api_key)
            except UploadTransportError as e:
                print_status(f"{candidate.record.key}: {e.message}", "error")
                continue

            report_response(result)
            if not result.success:
                continue

            published += 1
            changed |= config.remember(PackageRecord(
                key=candidate.record.key,
                version=candidate.newest.version,
                path=candidate.record.path,
            ))

    if changed:
        store.save(config)

    columns = [("Published", 12), ("Failed", 12)]
    widths = [w for _, w in columns]
    print_table_header(columns, widths)
    failed = len(updates) - published
    print_table_row([str(published), str(failed)], widths, ["green", "red" if failed else "grey"])
    return EXIT_OK


HANDLERS = {
    "upload": cmd_upload,
    "auth": cmd_auth,
    "logout": cmd_logout,
    "showcfg": cmd_showcfg,
    "check": cmd_check,
    "publish": cmd_publish,
}


# ==================== Main Parser ====================

def normalize_argv(argv: List[str]) -> List[str]:
    """
    Put the subcommand first so every option reaches its subparser.

    A first positional that is not a command is an archive path and gets the
    implicit ``upload`` command: ``numan -k KEY pkg.1.0.0.nupkg`` becomes
    ``numan upload -k KEY pkg.1.0.0.nupkg``.
    """
    argv = list(argv)
    i = 0
    while i < len(argv):
        token = argv[i]
        if token.startswith("-") and token != "-":
            i += 2 if token in _VALUE_OPTIONS else 1
            continue
        if token in COMMANDS:
            return [token] + argv[:i] + argv[i + 1:]
        return ["upload"] + argv
    return argv


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the numan CLI."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--registry-url", "-r",
        default=None,
        help="Registry package endpoint (default: NUMAN_REGISTRY_URL or nuget.org)"
    )
    common.add_argument("--verbose", "-v", action="store_true", help="Verbose output")

    key_option = argparse.ArgumentParser(add_help=False)
    key_option.add_argument("--key", "-k", help="Personal nuget api key")

    parser = argparse.ArgumentParser(
        prog="numan",
        description="Nuget packages manager",
        parents=[common],
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  numan ./bin/Release/MyLib.1.2.0.nupkg -k <api-key>
  numan auth <api-key>
  numan check
  numan publish
        """
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    upload_parser = subparsers.add_parser(
        "upload", parents=[common, key_option], help="Upload a .nupkg file (default when a path is given)"
    )
    upload_parser.add_argument("path", help="Path to .nupkg file to send")
    upload_parser.add_argument(
        "--overlook", "-o", action="store_true", help="Do not remember the uploaded version"
    )

    auth_parser = subparsers.add_parser("auth", parents=[common], help="Remember personal nuget api key")
    auth_parser.add_argument("key", help="Personal nuget api key")

    subparsers.add_parser("logout", parents=[common], help="Forget personal nuget api key")
    subparsers.add_parser("showcfg", parents=[common], help="Print the configuration file")
    subparsers.add_parser("check", parents=[common], help="Look for newer versions of remembered packages")
    subparsers.add_parser(
        "publish", parents=[common, key_option], help="Upload newer versions of remembered packages"
    )

    return parser


def configure_logging(settings: Settings, verbose: bool) -> logging.Logger:
    file_level = logging.getLevelName(settings.log_level)
    if not isinstance(file_level, int):
        file_level = logging.WARNING
    level = logging.DEBUG if verbose else file_level
    logs_directory = str(settings.logs_dir) if settings.log_to_file else None
    logger, _ = setup_logging(
        level,
        file_level=file_level,
        interminal=verbose,
        logs_directory=logs_directory,
    )
    return logger


async def run(argv: Optional[List[str]] = None, settings: Optional[Settings] = None) -> int:
    """Parse ``argv`` and dispatch to the command handler."""
    if argv is None:
        argv = sys.argv[1:]
    parser = create_parser()
    args = parser.parse_args(normalize_argv(argv))

    settings = settings or get_settings()
    if args.registry_url:
        settings = settings.model_copy(update={"registry_url": args.registry_url})

    store = ConfigStore(settings.config_dir)
    store.ensure_dir()
    logger = configure_logging(settings, args.verbose)

    if not args.command:
        return EXIT_OK

    handler = HANDLERS[args.command]
    logger.debug(f"Running command {args.command}")

    try:
        return await handler(args, settings, store)
    except InputValidationError as e:
        print_status(e.message, "error")
        return e.exit_code
    except ConfigCorruptError as e:
        logger.error(e.message)
        print_status(e.message, "error")
        return e.exit_code
    except NumanError as e:
        print_status(f"Error: {e.message}", "error")
        return e.exit_code
    except Exception as e:
        logger.exception("Unexpected error")
        if args.verbose:
            import traceback
            traceback.print_exc()
        else:
            print_status(f"Error: {e}", "error")
        return 1



def main():
    """Sync entry point."""
    try:
        code = asyncio.run(run())
    except KeyboardInterrupt:
        print_status("\nInterrupted", "warning")
        code = EXIT_INTERRUPTED
    sys.exit(code)


if __name__ == "__main__":
    main()
