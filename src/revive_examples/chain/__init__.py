"""
Chain - Contract interaction layer for revive-examples.

Provides an async JSON-RPC client, ABI method tables, the contract
registry loader, and the deploy / call operations.

Uses httpx + eth-account + eth-abi instead of the heavyweight web3.py.
"""
