"""
Feature modules for FRC Data Proxy.

Each feature is a self-contained module with:
- models.py - dataclasses and feature exceptions (optional)
- service.py - Business logic
- client.py - Upstream access (statbotics only)
"""
