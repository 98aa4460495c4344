"""
KITA airdrop core: whitelist commitments and the one-time claim ledger.

Subpackages:
    crypto  - Keccak hashing, address canonicalization, leaf/node rules
    merkle  - Off-line tree builder and proof verifier
    ledger  - On-line claim ledger, token balances, state persistence
    schemas - Error taxonomy, canonical JSON, wire models
    config  - Runtime configuration
"""

__version__ = "0.1.0"
