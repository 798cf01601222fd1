from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from web3 import AsyncWeb3, Web3

from .chains import chain_spec
from .config import get_settings

LOGGER = logging.getLogger('appconfig.networks')


class ConfigurationError(Exception):
    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


def normalize_address(value: str, *, label: str = 'address') -> str:
    candidate = str(value or '').strip()
    if not Web3.is_address(candidate):
        raise ConfigurationError(f'invalid {label}: {candidate!r}')
    return Web3.to_checksum_address(candidate)


def _resolve_dir(path_value: str) -> Path:
    path = Path(path_value)
    if path.is_absolute():
        return path
    return Path.cwd() / path


class ChainConnector:
    """Resolves per-network RPC providers, contract handles and addresses.

    Lookups that depend only on local configuration raise ConfigurationError
    so a run can fail before any chain read is issued.
    """

    def __init__(self, deployments_dir: str | None = None, rpc_timeout_seconds: int | None = None) -> None:
        settings = get_settings()
        self.deployments_dir = _resolve_dir(deployments_dir or settings.deployments_dir)
        self.rpc_timeout_seconds = rpc_timeout_seconds or settings.rpc_timeout_seconds
        self._providers: dict[str, AsyncWeb3] = {}

    def _spec(self, network: str) -> dict[str, Any]:
        spec = chain_spec(network)
        if spec is None:
            raise ConfigurationError(f'unknown network: {network}')
        return spec

    def chain_id(self, network: str) -> int:
        return int(self._spec(network)['chain_id'])

    def rpc_url(self, network: str) -> str:
        spec = self._spec(network)
        rpc_env_key = str(spec.get('rpc_env_key', '')).strip()
        rpc_from_env = os.getenv(rpc_env_key, '').strip() if rpc_env_key else ''
        rpc_url = rpc_from_env or str(spec.get('default_rpc_url', '')).strip()
        if not rpc_url:
            raise ConfigurationError(f'no rpc url configured for network: {network}')
        return rpc_url

    def endpoint_address(self, network: str) -> str:
        address = str(self._spec(network).get('endpoint_address', '')).strip()
        if not address:
            raise ConfigurationError(f'no endpoint address known for network: {network}')
        return normalize_address(address, label=f'endpoint address for {network}')

    def deployment_address(self, network: str, name: str | None) -> str:
        if not name:
            raise ConfigurationError(f'no address given for {network} and no deployment name to look it up')

        path = self.deployments_dir / network / f'{name}.json'
        if not path.exists():
            raise ConfigurationError(f'deployment not found network={network} name={name} path={path}')

        try:
            payload = json.loads(path.read_text(encoding='utf-8'))
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f'deployment file is not valid json: {path}') from exc

        if not isinstance(payload, dict) or not payload.get('address'):
            raise ConfigurationError(f'deployment file has no address: {path}')
        return normalize_address(payload['address'], label=f'deployment address in {path}')

    def provider(self, network: str) -> AsyncWeb3:
        if network in self._providers:
            return self._providers[network]

        rpc_url = self.rpc_url(network)
        provider = AsyncWeb3(
            AsyncWeb3.AsyncHTTPProvider(rpc_url, request_kwargs={'timeout': self.rpc_timeout_seconds})
        )
        LOGGER.debug('provider created network=%s rpc_url=%s', network, rpc_url)
        self._providers[network] = provider
        return provider

    def contract(self, provider: AsyncWeb3, abi: list[dict[str, Any]], address: str) -> Any:
        return provider.eth.contract(address=Web3.to_checksum_address(address), abi=abi)
