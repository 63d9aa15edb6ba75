"""Partition key range discovery."""

from __future__ import annotations

import logging

from ..core.enums import HttpVerb, ResourceType
from ..core.exceptions import RequestError
from ..models.resources import CollectionTarget, PartitionKeyRange
from ..models.schemas import PartitionKeyRangeList
from ..utils.retry import DEFAULT_RETRY_POLICY, RetryPolicy, retry_async
from .rest.transport import CosmosTransport
from .routing import session_headers

logger = logging.getLogger(__name__)


class PartitionRangeResolver:
    """Fetches the current physical partition ranges of a collection.

    Ranges split and merge at any time, so nothing is cached: every call
    performs a fresh lookup.
    """

    def __init__(
        self, transport: CosmosTransport, retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY
    ) -> None:
        self._t = transport
        self._retry_policy = retry_policy

    async def resolve(
        self,
        target: CollectionTarget,
        *,
        session_token: str | None = None,
        retry_policy: RetryPolicy | None = None,
    ) -> list[PartitionKeyRange]:
        """Return the collection's ranges in the order the service lists them.

        Raises:
            RequestError: If the lookup fails permanently
        """

        async def attempt() -> list[PartitionKeyRange]:
            response = await self._t.send(
                verb=HttpVerb.GET,
                resource_type=ResourceType.PARTITION_KEY_RANGE,
                resource_link=target.resource_link,
                path=target.pkranges_path,
                headers=session_headers(session_token),
            )
            if not response.ok:
                raise RequestError(
                    f"Unable to get partition key ranges of collection {target}",
                    method=HttpVerb.GET.value,
                    path=target.pkranges_path,
                    status_code=response.status,
                    body=response.text,
                )
            body = PartitionKeyRangeList.model_validate(response.json())
            return [
                PartitionKeyRange(resource_id=body.rid, range_id=r.id) for r in body.ranges
            ]

        ranges = await retry_async(
            attempt, retry_policy or self._retry_policy, description=f"pkranges:{target}"
        )
        logger.debug(f"Resolved {len(ranges)} partition key ranges for {target}")
        return ranges
