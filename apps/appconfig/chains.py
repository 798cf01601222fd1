from __future__ import annotations

from typing import Any

ENDPOINT_V1 = '0x3c2269811836af69497e5f486a85d7316753cf62'
ENDPOINT_V1_L2 = '0xb6319cc6c8c27a8f5daf0dd3df91ea35c4720dd7'

CHAIN_SPECS: list[dict[str, Any]] = [
    {
        'network': 'sepolia-testnet',
        'chain_id': 10161,
        'name': 'Ethereum Sepolia',
        'rpc_env_key': 'SEPOLIA_TESTNET_RPC_URL',
        'default_rpc_url': 'https://eth-sepolia.public.blastapi.io',
        'endpoint_address': '0xae92d5ad7583ad66e49a0c67bad18f6ba52dddc1'
    },
    {
        'network': 'bsc-testnet',
        'chain_id': 10102,
        'name': 'BNB Chain Testnet',
        'rpc_env_key': 'BSC_TESTNET_RPC_URL',
        'default_rpc_url': 'https://data-seed-prebsc-1-s1.bnbchain.org:8545',
        'endpoint_address': '0x6fcb97553d41516cb228ac03fdc8b9a0a9df04a1'
    },
    {
        'network': 'avalanche-testnet',
        'chain_id': 10106,
        'name': 'Avalanche Fuji',
        'rpc_env_key': 'AVALANCHE_TESTNET_RPC_URL',
        'default_rpc_url': 'https://ava-testnet.public.blastapi.io/ext/bc/C/rpc',
        'endpoint_address': '0x93f54d755a063ce7bb9e6ac47eccc8e33411d706'
    },
    {
        'network': 'ethereum-mainnet',
        'chain_id': 101,
        'name': 'Ethereum',
        'rpc_env_key': 'ETHEREUM_MAINNET_RPC_URL',
        'default_rpc_url': 'https://eth.llamarpc.com',
        'endpoint_address': '0x66a71dcef29a0ffbdbe3c6a460a3b5bc225cd675'
    },
    {
        'network': 'bsc-mainnet',
        'chain_id': 102,
        'name': 'BNB Chain',
        'rpc_env_key': 'BSC_MAINNET_RPC_URL',
        'default_rpc_url': 'https://binance.llamarpc.com',
        'endpoint_address': ENDPOINT_V1
    },
    {
        'network': 'avalanche-mainnet',
        'chain_id': 106,
        'name': 'Avalanche C-Chain',
        'rpc_env_key': 'AVALANCHE_MAINNET_RPC_URL',
        'default_rpc_url': 'https://api.avax.network/ext/bc/C/rpc',
        'endpoint_address': ENDPOINT_V1
    },
    {
        'network': 'polygon-mainnet',
        'chain_id': 109,
        'name': 'Polygon',
        'rpc_env_key': 'POLYGON_MAINNET_RPC_URL',
        'default_rpc_url': 'https://polygon.llamarpc.com',
        'endpoint_address': ENDPOINT_V1
    },
    {
        'network': 'arbitrum-mainnet',
        'chain_id': 110,
        'name': 'Arbitrum One',
        'rpc_env_key': 'ARBITRUM_MAINNET_RPC_URL',
        'default_rpc_url': 'https://arbitrum.llamarpc.com',
        'endpoint_address': ENDPOINT_V1
    },
    {
        'network': 'optimism-mainnet',
        'chain_id': 111,
        'name': 'Optimism',
        'rpc_env_key': 'OPTIMISM_MAINNET_RPC_URL',
        'default_rpc_url': 'https://mainnet.optimism.io',
        'endpoint_address': ENDPOINT_V1
    },
    {
        'network': 'fantom-mainnet',
        'chain_id': 112,
        'name': 'Fantom',
        'rpc_env_key': 'FANTOM_MAINNET_RPC_URL',
        'default_rpc_url': 'https://fantom-mainnet.public.blastapi.io',
        'endpoint_address': ENDPOINT_V1_L2
    },
    {
        'network': 'metis-mainnet',
        'chain_id': 151,
        'name': 'Metis Andromeda',
        'rpc_env_key': 'METIS_MAINNET_RPC_URL',
        'default_rpc_url': 'https://metis-mainnet.public.blastapi.io',
        'endpoint_address': ENDPOINT_V1_L2
    },
    {
        'network': 'kava-mainnet',
        'chain_id': 177,
        'name': 'Kava EVM',
        'rpc_env_key': 'KAVA_MAINNET_RPC_URL',
        'default_rpc_url': 'https://kava-evm.publicnode.com',
        'endpoint_address': ENDPOINT_V1_L2
    },
    {
        'network': 'mantle-mainnet',
        'chain_id': 181,
        'name': 'Mantle',
        'rpc_env_key': 'MANTLE_MAINNET_RPC_URL',
        'default_rpc_url': 'https://1rpc.io/mantle',
        'endpoint_address': ENDPOINT_V1_L2
    },
    {
        'network': 'zkconsensys-mainnet',
        'chain_id': 183,
        'name': 'Linea',
        'rpc_env_key': 'ZKCONSENSYS_MAINNET_RPC_URL',
        'default_rpc_url': 'https://1rpc.io/linea',
        'endpoint_address': ENDPOINT_V1_L2
    },
    {
        'network': 'base-mainnet',
        'chain_id': 184,
        'name': 'Base',
        'rpc_env_key': 'BASE_MAINNET_RPC_URL',
        'default_rpc_url': 'https://base.llamarpc.com',
        'endpoint_address': ENDPOINT_V1_L2
    },
    {
        'network': 'scroll-mainnet',
        'chain_id': 214,
        'name': 'Scroll',
        'rpc_env_key': 'SCROLL_MAINNET_RPC_URL',
        'default_rpc_url': 'https://rpc.scroll.io',
        'endpoint_address': ENDPOINT_V1_L2
    }
]


def chain_spec(network: str) -> dict[str, Any] | None:
    for spec in CHAIN_SPECS:
        if spec['network'] == network:
            return spec
    return None
