"""
Voicetune
=========

Settings synchronization service for hosted voice agents.

This package provides:
- The agent settings model, validation and change tracking
- A voice-agent provider client (Retell) with error normalization
- Persistence of per-user settings
- An editing-session controller and the HTTP API
"""

__version__ = "1.0.0"
