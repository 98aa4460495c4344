"""
Airdrop HTTP API (FastAPI)

HTTP surface over the claim ledger:
- GET /health - Health check
- GET /root - Current root and owner
- PUT /root - Rotate the root (owner only)
- PUT /owner - Transfer ownership (owner only)
- POST /claim - Verify a proof and record the claim
- GET /claims/{address} - Claim status and balance

The acting address is taken from the X-Caller-Address header.

Usage:
    uvicorn airdrop_api.app:app --reload
"""

__version__ = "0.1.0"
