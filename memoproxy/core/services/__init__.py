"""Application services: proxies and key derivation."""
