"""artistledger: deposit-backed registry of artist records.

Artists register under their owner identity and a unique main name,
reserve a deposit for as long as they stay registered, and may only
unregister once the cooldown has elapsed and no verification is in place.
Large metadata (description, assets) is kept as content fingerprints,
never as raw bytes.
"""

__version__ = "0.1.0"
__description__ = "Deposit-backed artist registry with content-fingerprinted metadata"

from artistledger.core.registry import ArtistRegistry
from artistledger.models.artist import Artist

__all__ = ["ArtistRegistry", "Artist", "__version__"]
