"""Real Service Implementations.

The expensive services that proxies are placed in front of.
Bounded Context: Payments / Remote Data
"""
