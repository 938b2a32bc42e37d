"""Wallet - private key loading and transaction signers."""
