"""Infrastructure Layer: Contains concrete implementations and adapters.

Implements the interfaces defined in the domain layer: the real services
behind the proxies, cache stores, configuration, logging and console UI.
"""
