from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path

from .abi import parse_probe_fragment
from .config import get_settings
from .mesh import generate_app_config
from .models import DefaultConfigMesh, mesh_payload
from .networks import ChainConnector, ConfigurationError, normalize_address

LOGGER = logging.getLogger('appconfig.cli')


def parse_network_configs(
    raw: str,
    connector: ChainConnector,
    name: str | None = None
) -> dict[str, str]:
    """Turn ``eth:0xabc...,bsc`` into a network -> address map.

    Entries without an address are looked up from the deployments directory by ``name``.
    """
    configs: dict[str, str] = {}
    for entry in (raw or '').split(','):
        entry = entry.strip()
        if not entry:
            raise ConfigurationError(f'empty entry in networks list: {raw!r}')

        network, _, address = entry.partition(':')
        network = network.strip()
        address = address.strip()
        if not network:
            raise ConfigurationError(f'missing network name in entry: {entry!r}')
        if network in configs:
            raise ConfigurationError(f'network listed twice: {network}')

        if address:
            configs[network] = normalize_address(address, label=f'address for {network}')
        else:
            configs[network] = connector.deployment_address(network, name)
    return configs


def check_output_file_name(file_name: str) -> None:
    if not file_name:
        raise ConfigurationError('output file name is required')
    if not file_name.endswith('.json'):
        raise ConfigurationError('output file name must end with .json')
    if file_name.startswith('/') or Path(file_name).is_absolute():
        raise ConfigurationError('output file name must be relative')


def write_mesh(file_name: str, mesh: DefaultConfigMesh) -> Path:
    path = Path(file_name)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(mesh_payload(mesh), indent=2) + '\n', encoding='utf-8')
    return path


def run(
    networks: str,
    output_file_name: str,
    check_connection_function_fragment: str,
    name: str | None = None,
    connector: ChainConnector | None = None
) -> Path:
    connector = connector or ChainConnector()
    configs = parse_network_configs(networks, connector, name)
    check_output_file_name(output_file_name)
    probe = parse_probe_fragment(check_connection_function_fragment)

    mesh = asyncio.run(generate_app_config(connector, configs, probe, name))
    path = write_mesh(output_file_name, mesh)
    LOGGER.info('wrote app config networks=%s path=%s', len(mesh), path)
    return path


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description='Generate the effective cross-chain app config mesh for a deployed application'
    )
    parser.add_argument(
        '--networks',
        required=True,
        help='Comma separated list of network[:address]; missing addresses are read from deployments'
    )
    parser.add_argument('--name', default=None, help='Name of the deployed application')
    parser.add_argument('--output-file-name', required=True, help='Relative path of the .json output')
    parser.add_argument(
        '--check-connection-function-fragment',
        default=settings.default_check_connection_fragment,
        help='View function used to probe connectivity, e.g. "function trustedRemoteLookup(uint16) public view returns (bytes)"'
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=os.getenv('LOG_LEVEL', 'INFO').upper(),
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s'
    )
    args = build_parser().parse_args(argv)

    try:
        run(
            networks=args.networks,
            output_file_name=args.output_file_name,
            check_connection_function_fragment=args.check_connection_function_fragment,
            name=args.name
        )
    except ConfigurationError as exc:
        LOGGER.error('configuration error: %s', exc.detail)
        return 1
    except Exception:
        LOGGER.exception('app config generation failed; nothing was written')
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
