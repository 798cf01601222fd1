from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {'1', 'true', 'yes', 'y', 'on'}


@dataclass(frozen=True)
class Settings:
    retry_max_attempts: int
    retry_base_delay_seconds: float
    retry_growth_factor: float
    retry_max_delay_seconds: float
    retry_jitter: bool
    rpc_timeout_seconds: int
    deployments_dir: str
    default_check_connection_fragment: str


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings(
        retry_max_attempts=max(1, int(os.getenv('APPCONFIG_RETRY_MAX_ATTEMPTS', '10'))),
        retry_base_delay_seconds=float(os.getenv('APPCONFIG_RETRY_BASE_DELAY_SECONDS', '0.1')),
        retry_growth_factor=float(os.getenv('APPCONFIG_RETRY_GROWTH_FACTOR', '2')),
        retry_max_delay_seconds=float(os.getenv('APPCONFIG_RETRY_MAX_DELAY_SECONDS', '30')),
        retry_jitter=_env_bool('APPCONFIG_RETRY_JITTER', False),
        rpc_timeout_seconds=int(os.getenv('APPCONFIG_RPC_TIMEOUT_SECONDS', '10')),
        deployments_dir=os.getenv('DEPLOYMENTS_DIR', 'deployments'),
        default_check_connection_fragment=os.getenv(
            'APPCONFIG_CHECK_CONNECTION_FRAGMENT',
            'function trustedRemoteLookup(uint16) public view returns (bytes)'
        )
    )
