"""Data models for listing records and unhide results."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class VersionRecord(BaseModel):
    """One file version from `b2 ls --versions --json`.
    
    Only the fields used for hide detection are declared; everything
    else in the payload is kept as extra data.
    """
    
    model_config = ConfigDict(extra="allow")
    
    fileName: str | None = Field(default=None, description="Object path relative to the bucket")
    action: str | None = Field(default=None, description="Version action (newer CLI builds)")
    fileAction: str | None = Field(default=None, description="Version action (older CLI builds)")


class ReconciliationResult(BaseModel):
    """Outcome of one preview or unhide pass."""
    
    bucket: str
    dry_run: bool = False
    total: int = 0
    attempted: int = 0
    unhidden: int = 0
    failures: int = 0
    failed_names: list[str] = Field(default_factory=list)
    start_time: datetime = Field(default_factory=datetime.now)
    end_time: datetime | None = None
    
    @property
    def duration_seconds(self) -> float:
        """Calculate duration in seconds."""
        end = self.end_time or datetime.now()
        return (end - self.start_time).total_seconds()
    
    @property
    def exit_code(self) -> int:
        """0 when every attempted unhide succeeded, 2 otherwise."""
        return 2 if self.failures > 0 else 0
    
    def record_success(self) -> None:
        self.attempted += 1
        self.unhidden += 1
    
    def record_failure(self, name: str) -> None:
        self.attempted += 1
        self.failures += 1
        self.failed_names.append(name)
    
    def summary(self) -> str:
        """Generate human-readable summary."""
        if self.dry_run:
            return f"Dry run: {self.total:,} file name(s) would be unhidden in {self.bucket}"
        lines = [
            f"Unhide summary for {self.bucket}",
            f"  Hidden names found: {self.total:,}",
            f"  Attempted: {self.attempted:,}",
            f"  Unhidden: {self.unhidden:,}",
            f"  Failed: {self.failures:,}",
            f"  Time elapsed: {self.duration_seconds:.1f}s",
        ]
        return "\n".join(lines)
