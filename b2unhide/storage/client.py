"""Object storage client interface and the B2 command line implementation."""

import asyncio
from abc import ABC, abstractmethod

import structlog

from b2unhide.errors import ListingError, UnhideCommandError
from b2unhide.listing.target import build_file_uri

logger = structlog.get_logger()


class ObjectStorageClient(ABC):
    """Abstract base class for the remote calls the tool needs.
    
    Retries, authentication and timeouts belong to the implementation's
    underlying service client.
    """
    
    @abstractmethod
    async def list_versions(self, target_uri: str) -> str:
        """List every version of every file under a URI.
        
        Args:
            target_uri: URI of the bucket or prefix to list
            
        Returns:
            Raw JSON listing output
            
        Raises:
            ListingError: If the listing cannot be obtained
        """
        pass
    
    @abstractmethod
    async def unhide(self, bucket: str, name: str) -> None:
        """Remove the hide marker of one file.
        
        Raises:
            UnhideCommandError: If the call fails
        """
        pass
    
    @abstractmethod
    def unhide_command(self, bucket: str, name: str) -> list[str]:
        """Return the argv that `unhide` runs, for dry-run previews."""
        pass
    
    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this client implementation."""
        pass


class B2CommandLineClient(ObjectStorageClient):
    """Client that shells out to the `b2` command line tool."""
    
    def __init__(self, binary: str = "b2"):
        self.binary = binary
    
    @property
    def name(self) -> str:
        return "b2-cli"
    
    def list_command(self, target_uri: str) -> list[str]:
        return [self.binary, "ls", "--versions", "--recursive", "--json", target_uri]
    
    def unhide_command(self, bucket: str, name: str) -> list[str]:
        return [self.binary, "file", "unhide", build_file_uri(bucket, name)]
    
    async def _run(self, argv: list[str]) -> tuple[int, str, str]:
        proc = await asyncio.create_subprocess_exec(
            *argv,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await proc.communicate()
        return (
            proc.returncode,
            stdout.decode("utf-8", errors="replace"),
            stderr.decode("utf-8", errors="replace").strip(),
        )
    
    async def list_versions(self, target_uri: str) -> str:
        argv = self.list_command(target_uri)
        logger.debug("b2_command", argv=argv)
        try:
            returncode, stdout, stderr = await self._run(argv)
        except OSError as e:
            raise ListingError(f"could not run {self.binary}: {e}") from e
        
        if returncode != 0:
            raise ListingError(
                f"listing {target_uri} failed: {stderr or f'exit code {returncode}'}"
            )
        return stdout
    
    async def unhide(self, bucket: str, name: str) -> None:
        argv = self.unhide_command(bucket, name)
        logger.debug("b2_command", argv=argv)
        try:
            returncode, _, stderr = await self._run(argv)
        except OSError as e:
            raise UnhideCommandError(name, stderr=str(e)) from e
        
        if returncode != 0:
            raise UnhideCommandError(name, returncode=returncode, stderr=stderr)

