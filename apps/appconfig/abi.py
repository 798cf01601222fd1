from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from eth_abi import is_encodable_type

from .networks import ConfigurationError

ENDPOINT_ABI = [
    {
        'inputs': [{'internalType': 'address', 'name': '', 'type': 'address'}],
        'name': 'uaConfigLookup',
        'outputs': [
            {'internalType': 'uint16', 'name': 'sendVersion', 'type': 'uint16'},
            {'internalType': 'uint16', 'name': 'receiveVersion', 'type': 'uint16'},
            {'internalType': 'address', 'name': 'receiveLibraryAddress', 'type': 'address'},
            {'internalType': 'contract ILayerZeroMessagingLibrary', 'name': 'sendLibrary', 'type': 'address'}
        ],
        'stateMutability': 'view',
        'type': 'function'
    },
    {
        'inputs': [],
        'name': 'defaultSendVersion',
        'outputs': [{'internalType': 'uint16', 'name': '', 'type': 'uint16'}],
        'stateMutability': 'view',
        'type': 'function'
    },
    {
        'inputs': [],
        'name': 'defaultReceiveVersion',
        'outputs': [{'internalType': 'uint16', 'name': '', 'type': 'uint16'}],
        'stateMutability': 'view',
        'type': 'function'
    },
    {
        'inputs': [],
        'name': 'defaultSendLibrary',
        'outputs': [{'internalType': 'contract ILayerZeroMessagingLibrary', 'name': '', 'type': 'address'}],
        'stateMutability': 'view',
        'type': 'function'
    },
    {
        'inputs': [],
        'name': 'defaultReceiveLibraryAddress',
        'outputs': [{'internalType': 'address', 'name': '', 'type': 'address'}],
        'stateMutability': 'view',
        'type': 'function'
    }
]

_APPLICATION_CONFIGURATION_OUTPUTS = [
    {'internalType': 'uint16', 'name': 'inboundProofLibraryVersion', 'type': 'uint16'},
    {'internalType': 'uint64', 'name': 'inboundBlockConfirmations', 'type': 'uint64'},
    {'internalType': 'address', 'name': 'relayer', 'type': 'address'},
    {'internalType': 'uint16', 'name': 'outboundProofType', 'type': 'uint16'},
    {'internalType': 'uint64', 'name': 'outboundBlockConfirmations', 'type': 'uint64'},
    {'internalType': 'address', 'name': 'oracle', 'type': 'address'}
]

MESSAGING_LIBRARY_ABI = [
    {
        'inputs': [
            {'internalType': 'address', 'name': '', 'type': 'address'},
            {'internalType': 'uint16', 'name': '', 'type': 'uint16'}
        ],
        'name': 'appConfig',
        'outputs': _APPLICATION_CONFIGURATION_OUTPUTS,
        'stateMutability': 'view',
        'type': 'function'
    },
    {
        'inputs': [{'internalType': 'uint16', 'name': '', 'type': 'uint16'}],
        'name': 'defaultAppConfig',
        'outputs': _APPLICATION_CONFIGURATION_OUTPUTS,
        'stateMutability': 'view',
        'type': 'function'
    }
]

# function <name>(<int type> [name]) [modifiers] returns (bytes [memory] [name])
_FRAGMENT_RE = re.compile(
    r'^\s*function\s+(?P<name>[A-Za-z_]\w*)\s*'
    r'\(\s*(?P<arg>[a-z]\w*)(?:\s+[A-Za-z_]\w*)?\s*\)'
    r'[\w\s]*?\breturns\s*'
    r'\(\s*(?P<ret>[a-z]\w*)(?:\s+(?:memory|calldata))?(?:\s+[A-Za-z_]\w*)?\s*\)\s*;?\s*$'
)


@dataclass(frozen=True)
class ProbeFunction:
    name: str
    argument_type: str
    return_type: str

    @property
    def abi(self) -> list[dict[str, Any]]:
        return [
            {
                'inputs': [{'internalType': self.argument_type, 'name': '', 'type': self.argument_type}],
                'name': self.name,
                'outputs': [{'internalType': self.return_type, 'name': '', 'type': self.return_type}],
                'stateMutability': 'view',
                'type': 'function'
            }
        ]


def parse_probe_fragment(fragment: str) -> ProbeFunction:
    """Parse a human-readable view function such as
    ``function trustedRemoteLookup(uint16) public view returns (bytes)``.

    The function must take exactly one integer (the remote chain id) and return
    dynamic ``bytes``.
    """
    match = _FRAGMENT_RE.match(fragment or '')
    if match is None:
        raise ConfigurationError(f'malformed check connection function fragment: {fragment!r}')

    argument_type = match.group('arg')
    return_type = match.group('ret')
    if not is_encodable_type(argument_type) or not re.fullmatch(r'u?int\d*', argument_type):
        raise ConfigurationError(
            f'check connection function must take one integer chain id, got {argument_type!r}'
        )
    if return_type != 'bytes':
        raise ConfigurationError(
            f'check connection function must return bytes, got {return_type!r}'
        )

    return ProbeFunction(name=match.group('name'), argument_type=argument_type, return_type=return_type)
