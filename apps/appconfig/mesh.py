from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from web3 import AsyncWeb3

from .abi import ENDPOINT_ABI, ProbeFunction
from .models import ChainPathConfig, DefaultConfigMesh
from .networks import ChainConnector, ConfigurationError
from .resolver import get_remote_config, is_connected, resolve_versions
from .retry import RetryPolicy, policy_from_settings

LOGGER = logging.getLogger('appconfig.mesh')


@dataclass(frozen=True)
class NetworkContext:
    network: str
    address: str
    provider: AsyncWeb3
    endpoint: Any


def prepare_networks(connector: ChainConnector, configs: dict[str, str]) -> list[NetworkContext]:
    """Bind provider and endpoint handles for every network; no chain reads happen here."""
    if not configs:
        raise ConfigurationError('at least one network is required')

    contexts: list[NetworkContext] = []
    for network, address in configs.items():
        provider = connector.provider(network)
        endpoint = connector.contract(provider, ENDPOINT_ABI, connector.endpoint_address(network))
        # Resolved now so an unknown remote fails before assembly starts.
        connector.chain_id(network)
        contexts.append(NetworkContext(network=network, address=address, provider=provider, endpoint=endpoint))
    return contexts


async def _connected_remotes(
    connector: ChainConnector,
    context: NetworkContext,
    remote_networks: list[str],
    probe: ProbeFunction,
    policy: RetryPolicy
) -> list[str]:
    results = await asyncio.gather(
        *(
            is_connected(connector, context.network, context.address, remote, probe, policy)
            for remote in remote_networks
        )
    )
    return [remote for remote, connected in zip(remote_networks, results) if connected]


async def _resolve_network(
    connector: ChainConnector,
    context: NetworkContext,
    networks: list[str],
    probe: ProbeFunction,
    name: str | None,
    policy: RetryPolicy
) -> ChainPathConfig:
    versions = await resolve_versions(connector, context.endpoint, context.address, context.provider, policy)
    LOGGER.info(
        'resolved versions network=%s send=%s receive=%s',
        context.network,
        versions.send_version,
        versions.receive_version
    )

    candidates = [remote for remote in networks if remote != context.network]
    connected = await _connected_remotes(connector, context, candidates, probe, policy)
    LOGGER.info(
        'connectivity network=%s connected=%s skipped=%s',
        context.network,
        ','.join(connected) or '-',
        ','.join(remote for remote in candidates if remote not in connected) or '-'
    )

    remote_configs = await asyncio.gather(
        *(
            get_remote_config(
                connector,
                remote,
                versions.send_library,
                versions.receive_library,
                context.address,
                policy
            )
            for remote in connected
        )
    )

    return ChainPathConfig(
        name=name or None,
        send_version=versions.send_version,
        receive_version=versions.receive_version,
        address=context.address,
        remote_configs=tuple(remote_configs)
    )


async def generate_app_config(
    connector: ChainConnector,
    configs: dict[str, str],
    probe: ProbeFunction,
    name: str | None = None,
    policy: RetryPolicy | None = None
) -> DefaultConfigMesh:
    policy = policy or policy_from_settings()
    contexts = prepare_networks(connector, configs)
    networks = [context.network for context in contexts]

    LOGGER.info('generating app config networks=%s probe=%s', ','.join(networks), probe.name)
    results = await asyncio.gather(
        *(_resolve_network(connector, context, networks, probe, name, policy) for context in contexts)
    )
    return dict(zip(networks, results))
