"""Bucket and prefix handling for B2 URIs."""

from b2unhide.errors import UsageError

URI_SCHEME = "b2://"


def normalize_prefix(prefix: str | None) -> str:
    """Return the prefix as a directory scope ending in '/', or '' for none."""
    if not prefix:
        return ""
    return prefix if prefix.endswith("/") else f"{prefix}/"


def build_target_uri(bucket: str, prefix: str | None = None) -> str:
    """Build the listing URI for a bucket and optional prefix.
    
    Args:
        bucket: Bucket name (must be non-empty)
        prefix: Optional path scope inside the bucket
        
    Returns:
        URI such as 'b2://bucket' or 'b2://bucket/some/folder/'
        
    Raises:
        UsageError: If bucket is empty
    """
    if not bucket:
        raise UsageError("bucket name is required")
    scope = normalize_prefix(prefix)
    if scope:
        return f"{URI_SCHEME}{bucket}/{scope}"
    return f"{URI_SCHEME}{bucket}"


def build_file_uri(bucket: str, name: str) -> str:
    """URI of a single file, as passed to `b2 file unhide`."""
    return f"{URI_SCHEME}{bucket}/{name}"
