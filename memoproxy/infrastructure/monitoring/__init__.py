"""Monitoring: logging setup and the domain event dispatcher."""
