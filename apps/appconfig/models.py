from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RemoteConfig(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    remote_chain: str = Field(alias='remoteChain')
    inbound_proof_library_version: int = Field(alias='inboundProofLibraryVersion', ge=0)
    inbound_block_confirmations: int = Field(alias='inboundBlockConfirmations', ge=0)
    relayer: str
    outbound_proof_type: int = Field(alias='outboundProofType', ge=0)
    outbound_block_confirmations: int = Field(alias='outboundBlockConfirmations', ge=0)
    oracle: str


class ChainPathConfig(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str | None = None
    send_version: int = Field(alias='sendVersion', ge=0)
    receive_version: int = Field(alias='receiveVersion', ge=0)
    address: str
    remote_configs: tuple[RemoteConfig, ...] = Field(alias='remoteConfigs', default=())


DefaultConfigMesh = dict[str, ChainPathConfig]


def mesh_payload(mesh: DefaultConfigMesh) -> dict[str, Any]:
    return {
        network: config.model_dump(mode='json', by_alias=True, exclude_none=True)
        for network, config in mesh.items()
    }
