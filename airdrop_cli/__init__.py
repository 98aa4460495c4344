"""
Airdrop CLI

Command-line interface for the whitelist airdrop.

Usage:
    python -m airdrop_cli build whitelist.csv --out snapshot.json
    python -m airdrop_cli prove snapshot.json 0xabc...
    python -m airdrop_cli init --owner 0xOwner --root 0x...
    python -m airdrop_cli claim 0xabc... --snapshot snapshot.json
    python -m airdrop_cli status 0xabc...
"""

__version__ = "0.1.0"
