"""
Test fixtures package for airdrop tests.

- accounts.py: well-known checksummed test addresses

Usage:
    from fixtures.accounts import ALICE, BOB, OWNER
"""
