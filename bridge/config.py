"""Configuration for the bridge quote engine.

Defaults come from bridge.constants. Deployments can override them with
environment variables, and the remote feature-flag payload overrides
both at runtime.

Environment variables:
- BRIDGE_MAX_REFRESH_COUNT: Quote refresh cycles per request (default: 5)
- BRIDGE_REFRESH_RATE_SECONDS: Seconds between refreshes (default: 30)
- BRIDGE_MIN_FIAT_SRC_AMOUNT: Minimum source amount in fiat (default: 5)
- BRIDGE_SOFT_FIAT_SRC_AMOUNT: Small-amount warning threshold (default: 30)
- BRIDGE_MAX_RETURN_DIFFERENCE_PERCENTAGE: Return tolerance (default: 0.8)
- BRIDGE_ETA_CEILING_SECONDS: Recommended quote ETA ceiling (default: 3600)
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any

import structlog
from pydantic import BaseModel, Field

from bridge.constants import (
    ALLOWED_BRIDGE_CHAIN_IDS,
    BRIDGE_MIN_FIAT_SRC_AMOUNT,
    BRIDGE_PREFERRED_GAS_ESTIMATE,
    BRIDGE_QUOTE_MAX_ETA_SECONDS,
    BRIDGE_QUOTE_MAX_RETURN_DIFFERENCE_PERCENTAGE,
    BRIDGE_SOFT_FIAT_SRC_AMOUNT,
    DEFAULT_MAX_REFRESH_COUNT,
    DEFAULT_REFRESH_RATE_SECONDS,
    EXCHANGE_RATE_DEBOUNCE_SECONDS,
    NETWORK_CONGESTION_BUSY,
    QUOTE_REQUEST_DEBOUNCE_SECONDS,
)

logger = structlog.get_logger()


@dataclass(frozen=True)
class BridgeConfig:
    """Tunable parameters of ranking, validation and refreshing.

    Attributes:
        max_refresh_count: Refresh cycles allowed per request
        refresh_rate_seconds: Seconds between refresh cycles
        min_fiat_src_amount: Source amounts at or below this fiat value are too low
        soft_fiat_src_amount: Source amounts below this fiat value get a warning
        max_return_difference_percentage: Fraction of the best return a quote
            must reach to be recommended when sorting by ETA; also the
            return/sent ratio below which the return is flagged low
        eta_ceiling_seconds: Exclusive ETA ceiling for the recommended quote
            when sorting by cost
        congestion_busy_threshold: Network congestion reported as busy at or
            above this value
        preferred_gas_estimate: Gas estimate level used for the priority fee
        src_network_allowlist: Source chain ids enabled by feature flags
        dest_network_allowlist: Destination chain ids enabled by feature flags
        quote_request_debounce_seconds: Debounce for quote request inputs
        exchange_rate_debounce_seconds: Debounce for exchange rate fetches
    """

    max_refresh_count: int = DEFAULT_MAX_REFRESH_COUNT
    refresh_rate_seconds: int = DEFAULT_REFRESH_RATE_SECONDS
    min_fiat_src_amount: Decimal = BRIDGE_MIN_FIAT_SRC_AMOUNT
    soft_fiat_src_amount: Decimal = BRIDGE_SOFT_FIAT_SRC_AMOUNT
    max_return_difference_percentage: Decimal = BRIDGE_QUOTE_MAX_RETURN_DIFFERENCE_PERCENTAGE
    eta_ceiling_seconds: int = BRIDGE_QUOTE_MAX_ETA_SECONDS
    congestion_busy_threshold: Decimal = NETWORK_CONGESTION_BUSY
    preferred_gas_estimate: str = BRIDGE_PREFERRED_GAS_ESTIMATE
    src_network_allowlist: tuple[int, ...] = ALLOWED_BRIDGE_CHAIN_IDS
    dest_network_allowlist: tuple[int, ...] = ALLOWED_BRIDGE_CHAIN_IDS
    quote_request_debounce_seconds: float = QUOTE_REQUEST_DEBOUNCE_SECONDS
    exchange_rate_debounce_seconds: float = EXCHANGE_RATE_DEBOUNCE_SECONDS

    def __post_init__(self) -> None:
        if self.max_refresh_count < 0:
            raise ValueError(f"max_refresh_count cannot be negative: {self.max_refresh_count}")
        if self.refresh_rate_seconds <= 0:
            raise ValueError(f"refresh_rate_seconds must be positive: {self.refresh_rate_seconds}")
        if self.eta_ceiling_seconds <= 0:
            raise ValueError(f"eta_ceiling_seconds must be positive: {self.eta_ceiling_seconds}")
        if not Decimal(0) <= self.max_return_difference_percentage <= Decimal(1):
            raise ValueError(
                "max_return_difference_percentage must be within [0, 1]: "
                f"{self.max_return_difference_percentage}"
            )
        if self.min_fiat_src_amount < 0 or self.soft_fiat_src_amount < 0:
            raise ValueError("Fiat source amount thresholds cannot be negative")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> BridgeConfig:
        """Build a config from BRIDGE_* environment variables."""
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            max_refresh_count=int(env.get("BRIDGE_MAX_REFRESH_COUNT", defaults.max_refresh_count)),
            refresh_rate_seconds=int(
                env.get("BRIDGE_REFRESH_RATE_SECONDS", defaults.refresh_rate_seconds)
            ),
            min_fiat_src_amount=Decimal(
                env.get("BRIDGE_MIN_FIAT_SRC_AMOUNT", str(defaults.min_fiat_src_amount))
            ),
            soft_fiat_src_amount=Decimal(
                env.get("BRIDGE_SOFT_FIAT_SRC_AMOUNT", str(defaults.soft_fiat_src_amount))
            ),
            max_return_difference_percentage=Decimal(
                env.get(
                    "BRIDGE_MAX_RETURN_DIFFERENCE_PERCENTAGE",
                    str(defaults.max_return_difference_percentage),
                )
            ),
            eta_ceiling_seconds=int(
                env.get("BRIDGE_ETA_CEILING_SECONDS", defaults.eta_ceiling_seconds)
            ),
        )

    @classmethod
    def from_feature_flags(
        cls,
        flags: Mapping[str, Any],
        base: BridgeConfig | None = None,
    ) -> BridgeConfig:
        """Overlay the remote feature-flag payload on a base config.

        Flags that are absent keep the base value.

        Raises:
            pydantic.ValidationError: If a flag has an invalid value
        """
        parsed = FeatureFlags.model_validate(flags)
        overrides = parsed.model_dump(exclude_none=True)
        if "refresh_rate_ms" in overrides:
            overrides["refresh_rate_seconds"] = overrides.pop("refresh_rate_ms") // 1000
        for key in ("src_network_allowlist", "dest_network_allowlist"):
            if key in overrides:
                overrides[key] = tuple(overrides[key])

        config = replace(base or cls(), **overrides)
        logger.debug("bridge_config_updated", overrides=sorted(overrides))
        return config


class FeatureFlags(BaseModel):
    """Bridge feature flags as delivered by the remote flag service."""

    max_refresh_count: int | None = Field(default=None, alias="maxRefreshCount", ge=0)
    # Milliseconds on the wire
    refresh_rate_ms: int | None = Field(default=None, alias="refreshRate", ge=1000)
    min_fiat_src_amount: Decimal | None = Field(default=None, alias="minimumFiatSrcAmount", ge=0)
    max_return_difference_percentage: Decimal | None = Field(
        default=None, alias="maxReturnDifferencePercentage", ge=0, le=1
    )
    eta_ceiling_seconds: int | None = Field(default=None, alias="etaCeilingSeconds", gt=0)
    src_network_allowlist: list[int] | None = Field(default=None, alias="srcNetworkAllowlist")
    dest_network_allowlist: list[int] | None = Field(default=None, alias="destNetworkAllowlist")

    model_config = {"populate_by_name": True}


# Default configuration instance
DEFAULT_BRIDGE_CONFIG = BridgeConfig()
