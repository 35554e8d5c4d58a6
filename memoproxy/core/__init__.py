"""Core Application Layer: Orchestrates use cases and application logic.

Holds the proxies that sit between callers and real services, the key
derivation rules they use, and the command handler driving the CLI.
"""
