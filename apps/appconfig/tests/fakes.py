from __future__ import annotations

from collections.abc import Callable
from typing import Any

from apps.appconfig.networks import ChainConnector, ConfigurationError
from apps.appconfig.resolver import ZERO_ADDRESS
from apps.appconfig.retry import RetryPolicy

FAST_RETRY = RetryPolicy(max_attempts=3, base_delay_seconds=0, growth_factor=2, max_delay_seconds=0)

UNSET_CONFIG = (0, 0, ZERO_ADDRESS, 0, 0, ZERO_ADDRESS)


def addr(char: str) -> str:
    return '0x' + char * 40


class FakeCall:
    def __init__(self, thunk: Callable[[], Any]) -> None:
        self._thunk = thunk

    async def call(self) -> Any:
        return self._thunk()


class FakeFunctions:
    def __init__(self, contract: FakeContract) -> None:
        self._contract = contract

    def __getattr__(self, name: str) -> Callable[..., FakeCall]:
        handlers = self._contract.handlers
        if name not in handlers:
            raise AttributeError(name)

        def bind(*args: Any) -> FakeCall:
            self._contract.calls.append((name, args))
            return FakeCall(lambda: handlers[name](*args))

        return bind


class FakeContract:
    def __init__(self, address: str, handlers: dict[str, Callable[..., Any]]) -> None:
        self.address = address
        self.handlers = handlers
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.functions = FakeFunctions(self)


def flaky(value: Any, failures: int, error: type[Exception] = ConnectionError) -> Callable[..., Any]:
    state = {'remaining': failures}

    def handler(*_args: Any) -> Any:
        if state['remaining'] > 0:
            state['remaining'] -= 1
            raise error('rpc unavailable')
        return value

    return handler


def endpoint_contract(
    address: str,
    *,
    ua_config: tuple[int, int, str, str],
    default_send_version: int = 2,
    default_receive_version: int = 2,
    default_send_library: str = ZERO_ADDRESS,
    default_receive_library: str = ZERO_ADDRESS
) -> FakeContract:
    return FakeContract(
        address,
        {
            'uaConfigLookup': lambda _ua: ua_config,
            'defaultSendVersion': lambda: default_send_version,
            'defaultReceiveVersion': lambda: default_receive_version,
            'defaultSendLibrary': lambda: default_send_library,
            'defaultReceiveLibraryAddress': lambda: default_receive_library
        }
    )


def library_contract(
    address: str,
    *,
    app_configs: dict[int, tuple] | None = None,
    default_configs: dict[int, tuple] | None = None
) -> FakeContract:
    app_configs = app_configs or {}
    default_configs = default_configs or {}
    return FakeContract(
        address,
        {
            'appConfig': lambda _ua, chain_id: app_configs.get(chain_id, UNSET_CONFIG),
            'defaultAppConfig': lambda chain_id: default_configs[chain_id]
        }
    )


def probe_contract(address: str, trusted_remotes: dict[int, bytes]) -> FakeContract:
    return FakeContract(address, {'trustedRemoteLookup': lambda chain_id: trusted_remotes.get(chain_id, b'')})


class FakeConnector(ChainConnector):
    """In-memory stand-in: providers are network names, contracts are looked up by (network, address)."""

    def __init__(
        self,
        chain_ids: dict[str, int],
        endpoints: dict[str, str],
        contracts: dict[str, list[FakeContract]] | None = None,
        deployments: dict[tuple[str, str], str] | None = None
    ) -> None:
        self.chain_ids = chain_ids
        self.endpoints = endpoints
        self.contracts: dict[str, dict[str, FakeContract]] = {}
        for network, items in (contracts or {}).items():
            for contract in items:
                self.add_contract(network, contract)
        self.deployments = deployments or {}
        self.contract_requests: list[tuple[str, str]] = []

    def add_contract(self, network: str, contract: FakeContract) -> None:
        self.contracts.setdefault(network, {})[contract.address.lower()] = contract

    def chain_id(self, network: str) -> int:
        if network not in self.chain_ids:
            raise ConfigurationError(f'unknown network: {network}')
        return self.chain_ids[network]

    def endpoint_address(self, network: str) -> str:
        if network not in self.endpoints:
            raise ConfigurationError(f'no endpoint address known for network: {network}')
        return self.endpoints[network]

    def deployment_address(self, network: str, name: str | None) -> str:
        key = (network, name or '')
        if key not in self.deployments:
            raise ConfigurationError(f'deployment not found network={network} name={name}')
        return self.deployments[key]

    def provider(self, network: str) -> Any:
        if network not in self.chain_ids:
            raise ConfigurationError(f'unknown network: {network}')
        return network

    def contract(self, provider: Any, abi: list[dict[str, Any]], address: str) -> Any:
        self.contract_requests.append((provider, address))
        return self.contracts[provider][address.lower()]

    def all_calls(self) -> list[tuple[str, str, tuple[Any, ...]]]:
        return [
            (network, name, args)
            for network, contracts in self.contracts.items()
            for contract in contracts.values()
            for name, args in contract.calls
        ]
