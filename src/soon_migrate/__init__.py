"""Migrate Solana Anchor projects to the SOON Network, with oracle detection."""

__version__ = "0.2.0"
