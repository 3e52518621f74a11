"""Protocol constants for the bridge quote engine.

Centralizes well-known addresses, unit scales and the defaults used by
ranking, validation and refresh scheduling.
"""

from decimal import Decimal

# Native assets are addressed by the zero address in quote payloads
NATIVE_ADDRESS = "0x0000000000000000000000000000000000000000"

# Unit scales
NATIVE_DECIMALS = 18
GWEI_DECIMALS = 9

# Chains the bridge aggregator supports (decimal chain ids)
# Ethereum, Optimism, BNB, Polygon, zkSync Era, Base, Arbitrum, Avalanche, Linea
ALLOWED_BRIDGE_CHAIN_IDS = (1, 10, 56, 137, 324, 8453, 42161, 43114, 59144)

# Chains whose quotes carry an L1 data fee on top of execution gas
OPTIMISM_CHAIN_ID = 10
BASE_CHAIN_ID = 8453
L1_DATA_FEE_CHAIN_IDS = frozenset({OPTIMISM_CHAIN_ID, BASE_CHAIN_ID})

# Gas estimate level used for the priority fee
BRIDGE_PREFERRED_GAS_ESTIMATE = "medium"

# A quote slower than this is not recommended when sorting by cost
BRIDGE_QUOTE_MAX_ETA_SECONDS = 60 * 60

# A quote returning less than this fraction of the best return is not
# recommended when sorting by ETA. Also the return/sent ratio below which
# the estimated return is flagged as low.
BRIDGE_QUOTE_MAX_RETURN_DIFFERENCE_PERCENTAGE = Decimal("0.8")

# Fiat thresholds for the source amount
BRIDGE_MIN_FIAT_SRC_AMOUNT = Decimal("5")
BRIDGE_SOFT_FIAT_SRC_AMOUNT = Decimal("30")

# Network congestion at or above this value is reported as busy
NETWORK_CONGESTION_BUSY = Decimal("0.66")

# Refresh scheduling
DEFAULT_MAX_REFRESH_COUNT = 5
DEFAULT_REFRESH_RATE_SECONDS = 30

# Debounce delays
QUOTE_REQUEST_DEBOUNCE_SECONDS = 0.3
EXCHANGE_RATE_DEBOUNCE_SECONDS = 1.0
