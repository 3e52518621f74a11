"""Cross-chain bridge quote aggregation, ranking and validation."""

from bridge.config import DEFAULT_BRIDGE_CONFIG, BridgeConfig
from bridge.engine import BridgeQuoteEngine, BridgeQuotes, QuoteBatch

__version__ = "0.1.0"
__all__ = [
    "BridgeConfig",
    "BridgeQuoteEngine",
    "BridgeQuotes",
    "DEFAULT_BRIDGE_CONFIG",
    "QuoteBatch",
    "__version__",
]
