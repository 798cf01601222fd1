import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from web3 import AsyncWeb3, Web3

from apps.appconfig.abi import ENDPOINT_ABI
from apps.appconfig.chains import CHAIN_SPECS, chain_spec
from apps.appconfig.config import get_settings
from apps.appconfig.networks import ChainConnector, ConfigurationError


class ChainSpecsTests(unittest.TestCase):
    def test_specs_are_unique_and_complete(self) -> None:
        networks = [spec['network'] for spec in CHAIN_SPECS]
        chain_ids = [spec['chain_id'] for spec in CHAIN_SPECS]

        self.assertEqual(len(networks), len(set(networks)))
        self.assertEqual(len(chain_ids), len(set(chain_ids)))
        for spec in CHAIN_SPECS:
            self.assertTrue(Web3.is_address(spec['endpoint_address']), spec['network'])
            self.assertTrue(spec['default_rpc_url'].startswith('https://'), spec['network'])

    def test_lookup_by_network(self) -> None:
        self.assertEqual(chain_spec('ethereum-mainnet')['chain_id'], 101)
        self.assertIsNone(chain_spec('moon-mainnet'))


class ChainConnectorTests(unittest.TestCase):
    def tearDown(self) -> None:
        get_settings.cache_clear()

    def test_chain_id_and_endpoint_address(self) -> None:
        connector = ChainConnector()

        self.assertEqual(connector.chain_id('bsc-mainnet'), 102)
        self.assertTrue(Web3.is_checksum_address(connector.endpoint_address('bsc-mainnet')))

    def test_unknown_network_is_a_configuration_error(self) -> None:
        connector = ChainConnector()

        for lookup in (connector.chain_id, connector.endpoint_address, connector.provider, connector.rpc_url):
            with self.subTest(lookup=lookup.__name__):
                with self.assertRaises(ConfigurationError):
                    lookup('moon-mainnet')

    def test_rpc_url_prefers_environment(self) -> None:
        connector = ChainConnector()

        with patch.dict('os.environ', {'BSC_MAINNET_RPC_URL': 'http://localhost:8545'}, clear=False):
            self.assertEqual(connector.rpc_url('bsc-mainnet'), 'http://localhost:8545')
        with patch.dict('os.environ', {'BSC_MAINNET_RPC_URL': ''}, clear=False):
            self.assertEqual(connector.rpc_url('bsc-mainnet'), 'https://binance.llamarpc.com')

    def test_provider_is_cached_and_binds_contracts(self) -> None:
        connector = ChainConnector(rpc_timeout_seconds=3)

        provider = connector.provider('ethereum-mainnet')
        endpoint = connector.contract(provider, ENDPOINT_ABI, connector.endpoint_address('ethereum-mainnet'))

        self.assertIsInstance(provider, AsyncWeb3)
        self.assertIs(connector.provider('ethereum-mainnet'), provider)
        self.assertEqual(endpoint.address, connector.endpoint_address('ethereum-mainnet'))

    def test_deployment_address_from_deployments_dir(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            deployment = Path(tmp) / 'bsc-mainnet' / 'OFT.json'
            deployment.parent.mkdir(parents=True)
            deployment.write_text(json.dumps({'address': '0x' + 'ab' * 20, 'abi': []}), encoding='utf-8')
            (Path(tmp) / 'bsc-mainnet' / 'Broken.json').write_text('{not json', encoding='utf-8')

            with patch.dict('os.environ', {'DEPLOYMENTS_DIR': tmp}, clear=False):
                get_settings.cache_clear()
                connector = ChainConnector()

                address = connector.deployment_address('bsc-mainnet', 'OFT')
                for name in ('Missing', 'Broken', None):
                    with self.subTest(name=name):
                        with self.assertRaises(ConfigurationError):
                            connector.deployment_address('bsc-mainnet', name)

        self.assertEqual(address, Web3.to_checksum_address('0x' + 'ab' * 20))
