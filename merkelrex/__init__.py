"""Exchange simulator: CSV order book, ask/bid matching, a wallet and Merkle roots."""

__version__ = "0.1.0"