"""Bridgeable network selection.

The wallet knows a set of networks the user added. Only those the bridge
aggregator supports are offered, and the feature flags narrow the source
and destination lists further.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from bridge.constants import ALLOWED_BRIDGE_CHAIN_IDS


@dataclass(frozen=True)
class NetworkConfig:
    """A network the user added to the wallet.

    Attributes:
        chain_id: Decimal chain id
        name: Display name
        native_currency: Native currency ticker (e.g. "ETH", "BNB")
    """

    chain_id: int
    name: str
    native_currency: str


def bridgeable_networks(
    networks: Iterable[NetworkConfig],
    allowed_chain_ids: Sequence[int] = ALLOWED_BRIDGE_CHAIN_IDS,
) -> list[NetworkConfig]:
    """User networks supported by the aggregator, first occurrence per chain id."""
    seen: set[int] = set()
    result: list[NetworkConfig] = []
    for network in networks:
        if network.chain_id in seen:
            continue
        seen.add(network.chain_id)
        if network.chain_id in allowed_chain_ids:
            result.append(network)
    return result


def from_chains(
    networks: Iterable[NetworkConfig],
    src_allowlist: Sequence[int],
) -> list[NetworkConfig]:
    """Networks that may be bridged from."""
    return [n for n in bridgeable_networks(networks) if n.chain_id in src_allowlist]


def to_chains(
    networks: Iterable[NetworkConfig],
    dest_allowlist: Sequence[int],
) -> list[NetworkConfig]:
    """Networks that may be bridged to."""
    return [n for n in bridgeable_networks(networks) if n.chain_id in dest_allowlist]


def find_chain(chains: Iterable[NetworkConfig], chain_id: int | None) -> NetworkConfig | None:
    if chain_id is None:
        return None
    return next((chain for chain in chains if chain.chain_id == chain_id), None)


def is_bridge_tx(
    from_chain: NetworkConfig | None,
    to_chain: NetworkConfig | None,
    bridge_enabled: bool = True,
) -> bool:
    """True when the swap crosses chains and bridging is enabled."""
    if not bridge_enabled or from_chain is None or to_chain is None:
        return False
    return from_chain.chain_id != to_chain.chain_id
