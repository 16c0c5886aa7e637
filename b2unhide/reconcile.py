"""Preview or execute unhide calls for a set of hidden names."""

import shlex
import sys
from collections.abc import Sequence
from datetime import datetime
from typing import TextIO

import structlog

from b2unhide.errors import UnhideCommandError
from b2unhide.models import ReconciliationResult
from b2unhide.storage import ObjectStorageClient

logger = structlog.get_logger()


def render_unhide_command(argv: Sequence[str]) -> str:
    """Shell-quoted command line for display."""
    return shlex.join(argv)


class Reconciler:
    """Walks the hidden names in order, one remote call at a time."""
    
    def __init__(
        self,
        client: ObjectStorageClient,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ):
        """Initialize reconciler.
        
        Args:
            client: Storage client used for unhide calls and previews
            out: Stream for progress and results (default: stdout)
            err: Stream for failures (default: stderr)
        """
        self.client = client
        self.out = out or sys.stdout
        self.err = err or sys.stderr
    
    async def run(self, names: Sequence[str], bucket: str, dry_run: bool = False) -> ReconciliationResult:
        """Preview or unhide every name.
        
        Args:
            names: Sorted, unique hidden file names
            bucket: Bucket the names belong to
            dry_run: Print the commands instead of running them
            
        Returns:
            ReconciliationResult with the failure count
        """
        result = ReconciliationResult(bucket=bucket, dry_run=dry_run, total=len(names))
        
        if dry_run:
            self._preview(names, bucket)
        else:
            await self._reconcile(names, bucket, result)
        
        result.end_time = datetime.now()
        return result
    
    def _preview(self, names: Sequence[str], bucket: str) -> None:
        print("Dry run mode. Commands that would run:", file=self.out)
        for name in names:
            print(render_unhide_command(self.client.unhide_command(bucket, name)), file=self.out)
        logger.info("preview_completed", bucket=bucket, names=len(names))
    
    async def _reconcile(self, names: Sequence[str], bucket: str, result: ReconciliationResult) -> None:
        logger.info("unhide_started", bucket=bucket, names=len(names), client=self.client.name)
        
        for name in names:
            print(f"Unhiding: {name}", file=self.out)
            try:
                await self.client.unhide(bucket, name)
            except UnhideCommandError as e:
                result.record_failure(name)
                logger.warning(
                    "unhide_failed",
                    bucket=bucket,
                    file_name=name,
                    returncode=e.returncode,
                    error=str(e),
                )
                print(f"ERROR: Failed to unhide {name}: {e}", file=self.err)
                continue
            result.record_success()
            logger.debug("unhide_succeeded", bucket=bucket, file_name=name)
        
        if result.failures:
            print(f"Completed with {result.failures} failure(s).", file=self.err)
        else:
            print("All hidden files successfully unhidden.", file=self.out)
        
        logger.info(
            "unhide_completed",
            bucket=bucket,
            attempted=result.attempted,
            unhidden=result.unhidden,
            failures=result.failures,
        )
