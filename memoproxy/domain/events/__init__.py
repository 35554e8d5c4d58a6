"""Domain Event definitions.

Represents significant occurrences within a proxied call that other parts
of the system (logging, metrics, the CLI) might react to.
"""
