"""Main orchestrator for the unhide tool."""

import argparse
import asyncio
import sys
from enum import Enum
from pathlib import Path
from typing import TextIO

import structlog

from b2unhide.config import Settings, settings
from b2unhide.errors import B2UnhideError
from b2unhide.listing import build_target_uri, collect_hidden_names, parse_records
from b2unhide.logging_config import configure_logging
from b2unhide.models import ReconciliationResult
from b2unhide.precheck import ensure_environment
from b2unhide.reconcile import Reconciler
from b2unhide.storage import B2CommandLineClient, ObjectStorageClient

logger = structlog.get_logger()


class RunState(str, Enum):
    """Stages of a single run. There are no backward transitions."""
    IDLE = "idle"
    LISTING = "listing"
    FILTERING = "filtering"
    PREVIEWING = "previewing"
    RECONCILING = "reconciling"
    DONE = "done"


class UnhideRunner:
    """Orchestrates listing, filtering and reconciliation."""
    
    def __init__(
        self,
        config: Settings | None = None,
        client: ObjectStorageClient | None = None,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ):
        """Initialize runner.
        
        Args:
            config: Settings instance (uses global settings if None)
            client: Storage client; when None a B2 CLI client is created
                after the environment check passes
            out: Stream for progress and results (default: stdout)
            err: Stream for failures (default: stderr)
        """
        self.config = config or settings
        self.client = client
        self.out = out or sys.stdout
        self.err = err or sys.stderr
        self.state = RunState.IDLE
    
    def _transition(self, state: RunState) -> None:
        logger.debug("state_changed", from_state=self.state.value, to_state=state.value)
        self.state = state
    
    def _get_client(self) -> ObjectStorageClient:
        if self.client is None:
            ensure_environment(self.config.commands_to_check)
            self.client = B2CommandLineClient(binary=self.config.b2_binary)
        return self.client
    
    async def run(
        self,
        bucket: str,
        prefix: str | None = None,
        dry_run: bool = False,
    ) -> ReconciliationResult:
        """Run one unhide pass.
        
        Args:
            bucket: Bucket name
            prefix: Optional folder inside the bucket
            dry_run: Print the unhide commands instead of running them
            
        Returns:
            ReconciliationResult; its exit_code is 0 or 2
            
        Raises:
            UsageError: If bucket is empty
            EnvironmentCheckError: If the B2 CLI is not on PATH
            ListingError: If the listing call fails or returns bad JSON
        """
        target_uri = build_target_uri(bucket, prefix)
        client = self._get_client()
        
        self._transition(RunState.LISTING)
        print(f"Scanning for hidden files under: {target_uri}", file=self.out)
        logger.info("listing_started", target=target_uri, client=client.name)
        payload = await client.list_versions(target_uri)
        
        self._transition(RunState.FILTERING)
        records = parse_records(payload)
        names = collect_hidden_names(records)
        logger.info("hidden_names_collected", records=len(records), hidden=len(names))
        
        if not names:
            print("No hidden files found. Nothing to do.", file=self.out)
            self._transition(RunState.DONE)
            return ReconciliationResult(bucket=bucket, dry_run=dry_run)
        
        print(f"Found {len(names)} hidden file name(s).", file=self.out)
        
        self._transition(RunState.PREVIEWING if dry_run else RunState.RECONCILING)
        reconciler = Reconciler(client, out=self.out, err=self.err)
        result = await reconciler.run(names, bucket, dry_run=dry_run)
        
        print("\n" + result.summary(), file=self.out)
        
        self._transition(RunState.DONE)
        return result


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with 1, keeping 2 for partial failures."""
    
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="b2unhide",
        description="Unhide all hidden files in a Backblaze B2 bucket (optionally within a prefix)",
    )
    parser.add_argument(
        "bucket",
        nargs="?",
        default=None,
        help="Bucket name",
    )
    parser.add_argument(
        "prefix",
        nargs="?",
        default=None,
        help="Only unhide files under this folder",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the unhide commands without running them",
    )
    parser.add_argument(
        "--b2-binary",
        default=None,
        help="Name or path of the b2 command line tool",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Logging level",
    )
    parser.add_argument(
        "--log-format",
        choices=["console", "json"],
        default=None,
        help="Log format",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Log file path",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for CLI. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    
    if not args.bucket:
        parser.print_usage(sys.stderr)
        print("ERROR: bucket name is required", file=sys.stderr)
        return 1
    
    # Override settings with CLI args
    overrides = {}
    if args.b2_binary:
        overrides["b2_binary"] = args.b2_binary
    if args.log_level:
        overrides["log_level"] = args.log_level
    if args.log_format:
        overrides["log_format"] = args.log_format
    if args.log_file:
        overrides["log_file"] = args.log_file
    config = settings.model_copy(update=overrides)
    
    configure_logging(
        log_level=config.log_level,
        log_file=config.log_file,
        format_type=config.log_format,
    )
    
    try:
        runner = UnhideRunner(config)
        result = asyncio.run(runner.run(args.bucket, args.prefix, dry_run=args.dry_run))
    except KeyboardInterrupt:
        print("\nShutdown requested by user", file=sys.stderr)
        return 130
    except B2UnhideError as e:
        logger.error("run_aborted", error=str(e), error_type=type(e).__name__)
        print(f"ERROR: {e}", file=sys.stderr)
        return e.exit_code
    
    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
