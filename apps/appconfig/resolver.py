from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from web3 import AsyncWeb3
from web3.exceptions import BadFunctionCallOutput, ContractLogicError

from .abi import MESSAGING_LIBRARY_ABI, ProbeFunction
from .models import RemoteConfig
from .networks import ChainConnector
from .retry import RetryPolicy, with_backoff

LOGGER = logging.getLogger('appconfig.resolver')

ZERO_ADDRESS = '0x0000000000000000000000000000000000000000'

APPLICATION_CONFIG_FIELDS = (
    'inbound_proof_library_version',
    'inbound_block_confirmations',
    'relayer',
    'outbound_proof_type',
    'outbound_block_confirmations',
    'oracle'
)


@dataclass(frozen=True)
class ResolvedVersions:
    send_version: int
    receive_version: int
    send_library: Any
    receive_library: Any


@dataclass(frozen=True)
class ApplicationConfig:
    inbound_proof_library_version: int
    inbound_block_confirmations: int
    relayer: str
    outbound_proof_type: int
    outbound_block_confirmations: int
    oracle: str

    @classmethod
    def from_call(cls, raw: Any) -> ApplicationConfig:
        values = tuple(raw)
        if len(values) != len(APPLICATION_CONFIG_FIELDS):
            raise ValueError(f'unexpected application configuration shape: {raw!r}')
        (
            inbound_proof_library_version,
            inbound_block_confirmations,
            relayer,
            outbound_proof_type,
            outbound_block_confirmations,
            oracle
        ) = values
        return cls(
            inbound_proof_library_version=int(inbound_proof_library_version),
            inbound_block_confirmations=int(inbound_block_confirmations),
            relayer=str(relayer),
            outbound_proof_type=int(outbound_proof_type),
            outbound_block_confirmations=int(outbound_block_confirmations),
            oracle=str(oracle)
        )


def _is_zero_address(value: str) -> bool:
    return not value or value.lower() == ZERO_ADDRESS


def merge_remote_config(remote_network: str, app: ApplicationConfig, default: ApplicationConfig) -> RemoteConfig:
    """Field-by-field override: application values win when set (> 0, or a non-zero address)."""
    return RemoteConfig(
        remote_chain=remote_network,
        inbound_proof_library_version=(
            app.inbound_proof_library_version
            if app.inbound_proof_library_version > 0
            else default.inbound_proof_library_version
        ),
        inbound_block_confirmations=(
            app.inbound_block_confirmations
            if app.inbound_block_confirmations > 0
            else default.inbound_block_confirmations
        ),
        relayer=default.relayer if _is_zero_address(app.relayer) else app.relayer,
        outbound_proof_type=(
            app.outbound_proof_type
            if app.outbound_proof_type > 0
            else default.outbound_proof_type
        ),
        outbound_block_confirmations=(
            app.outbound_block_confirmations
            if app.outbound_block_confirmations > 0
            else default.outbound_block_confirmations
        ),
        oracle=default.oracle if _is_zero_address(app.oracle) else app.oracle
    )


async def is_connected(
    connector: ChainConnector,
    network: str,
    address: str,
    remote_network: str,
    probe: ProbeFunction,
    policy: RetryPolicy | None = None
) -> bool:
    remote_chain_id = connector.chain_id(remote_network)
    app = connector.contract(connector.provider(network), probe.abi, address)
    call = getattr(app.functions, probe.name)

    try:
        value = await with_backoff(
            lambda: call(remote_chain_id).call(),
            policy=policy,
            label=f'{network}.{probe.name}({remote_network})'
        )
    except (ContractLogicError, BadFunctionCallOutput) as exc:
        LOGGER.info(
            'probe returned no value network=%s remote=%s function=%s reason=%s',
            network,
            remote_network,
            probe.name,
            exc
        )
        return False

    connected = len(value or b'') > 0
    LOGGER.debug('probe network=%s remote=%s connected=%s', network, remote_network, connected)
    return connected


async def resolve_versions(
    connector: ChainConnector,
    endpoint: Any,
    address: str,
    provider: AsyncWeb3,
    policy: RetryPolicy | None = None
) -> ResolvedVersions:
    ua_send_version, ua_receive_version, ua_receive_library, ua_send_library = await with_backoff(
        lambda: endpoint.functions.uaConfigLookup(address).call(),
        policy=policy,
        label=f'uaConfigLookup({address})'
    )

    if int(ua_send_version) == 0:
        send_library_address = await with_backoff(
            lambda: endpoint.functions.defaultSendLibrary().call(), policy=policy, label='defaultSendLibrary'
        )
        send_version = await with_backoff(
            lambda: endpoint.functions.defaultSendVersion().call(), policy=policy, label='defaultSendVersion'
        )
    else:
        send_library_address = ua_send_library
        send_version = ua_send_version

    if int(ua_receive_version) == 0:
        receive_library_address = await with_backoff(
            lambda: endpoint.functions.defaultReceiveLibraryAddress().call(),
            policy=policy,
            label='defaultReceiveLibraryAddress'
        )
        receive_version = await with_backoff(
            lambda: endpoint.functions.defaultReceiveVersion().call(), policy=policy, label='defaultReceiveVersion'
        )
    else:
        receive_library_address = ua_receive_library
        receive_version = ua_receive_version

    return ResolvedVersions(
        send_version=int(send_version),
        receive_version=int(receive_version),
        send_library=connector.contract(provider, MESSAGING_LIBRARY_ABI, send_library_address),
        receive_library=connector.contract(provider, MESSAGING_LIBRARY_ABI, receive_library_address)
    )


async def read_application_configs(
    remote_chain_id: int,
    send_library: Any,
    receive_library: Any,
    address: str
) -> tuple[Any, Any]:
    """Raw ``appConfig`` results from the send and the receive library."""
    send_raw = await send_library.functions.appConfig(address, remote_chain_id).call()
    receive_raw = await receive_library.functions.appConfig(address, remote_chain_id).call()
    return send_raw, receive_raw


def combine_application_config(
    send_config: ApplicationConfig,
    receive_config: ApplicationConfig
) -> ApplicationConfig:
    # Inbound settings live on the receive library, outbound ones on the send library.
    return ApplicationConfig(
        inbound_proof_library_version=receive_config.inbound_proof_library_version,
        inbound_block_confirmations=receive_config.inbound_block_confirmations,
        relayer=send_config.relayer,
        outbound_proof_type=send_config.outbound_proof_type,
        outbound_block_confirmations=send_config.outbound_block_confirmations,
        oracle=send_config.oracle
    )


async def get_remote_config(
    connector: ChainConnector,
    remote_network: str,
    send_library: Any,
    receive_library: Any,
    address: str,
    policy: RetryPolicy | None = None
) -> RemoteConfig:
    remote_chain_id = connector.chain_id(remote_network)

    send_raw, receive_raw = await with_backoff(
        lambda: read_application_configs(remote_chain_id, send_library, receive_library, address),
        policy=policy,
        label=f'appConfig({remote_network})'
    )
    app_config = combine_application_config(
        ApplicationConfig.from_call(send_raw),
        ApplicationConfig.from_call(receive_raw)
    )
    default_config = ApplicationConfig.from_call(
        await with_backoff(
            lambda: send_library.functions.defaultAppConfig(remote_chain_id).call(),
            policy=policy,
            label=f'defaultAppConfig({remote_network})'
        )
    )
    return merge_remote_config(remote_network, app_config, default_config)
