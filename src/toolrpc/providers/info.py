"""Account information tools."""

from __future__ import annotations

from toolrpc.cancellation import CancellationToken
from toolrpc.registry.groups import ProviderGroup
from toolrpc.services.client import GisServiceClient
from toolrpc.services.models import Subscription

group = ProviderGroup("InfoTools", "Provides account information using the GISBlox Info API.")


@group.tool("info_subscriptions_list")
async def get_subscriptions(
    client: GisServiceClient,
    cancellation: CancellationToken,
) -> list[Subscription]:
    """Returns the subscriptions of the authorized GISBlox user."""
    return await client.get_subscriptions()
