import asyncio
from temporalio.client import Client
from repopages.core.config import settings
from repopages.utils.logging import get_logger

logger = get_logger(__name__)

# The analysis engine may come up after this service
TEMPORAL_MAX_RETRIES = 10
TEMPORAL_BASE_DELAY = 1.0
TEMPORAL_MAX_DELAY = 30.0

# Reconnects from inside a request must fail fast
TEMPORAL_REQUEST_MAX_RETRIES = 1


async def connect_to_temporal_with_retry(
    target_host: str | None = None,
    namespace: str | None = None,
    max_retries: int = TEMPORAL_MAX_RETRIES,
    base_delay: float = TEMPORAL_BASE_DELAY,
    max_delay: float = TEMPORAL_MAX_DELAY,
) -> Client:
    """
    Connect to the Temporal server that fronts the branch analysis engine.

    Args:
        target_host: Temporal server URL (defaults to settings.TEMPORAL_SERVER_URL)
        namespace: Temporal namespace (defaults to settings.TEMPORAL_NAMESPACE)
        max_retries: Maximum number of retry attempts
        base_delay: Initial delay in seconds before first retry
        max_delay: Maximum delay between retries in seconds

    Returns:
        Connected Temporal Client
    """
    target_host = target_host or settings.TEMPORAL_SERVER_URL
    namespace = namespace or settings.TEMPORAL_NAMESPACE

    for attempt in range(max_retries + 1):
        try:
            client = await Client.connect(target_host, namespace=namespace)
            logger.info(f"Connected to Temporal server at {target_host} (namespace={namespace})")
            return client
        except Exception as e:
            if attempt == max_retries:
                logger.error(f"Failed to connect to Temporal after {max_retries + 1} attempts: {e}")
                raise

            delay = min(base_delay * (2 ** attempt), max_delay)
            logger.warning(
                f"Temporal connection attempt {attempt + 1}/{max_retries + 1} failed: {e}. "
                f"Retrying in {delay:.1f}s..."
            )
            await asyncio.sleep(delay)

    raise RuntimeError("Unexpected state in connect_to_temporal_with_retry")


class TemporalClient:
    """Shared Temporal connection, created lazily on first use."""

    def __init__(self):
        self.client: Client | None = None

    async def connect(self, max_retries: int = TEMPORAL_MAX_RETRIES):
        self.client = await connect_to_temporal_with_retry(max_retries=max_retries)

    async def close(self):
        # Client holds no resources of its own; dropping it releases the connection
        if self.client:
            self.client = None
            logger.info("Disconnected from Temporal server.")

    async def get_client(self) -> Client:
        """Connected client; reconnects with a short retry budget when startup did not connect."""
        if not self.client:
            await self.connect(max_retries=TEMPORAL_REQUEST_MAX_RETRIES)
        return self.client


temporal_client = TemporalClient()
