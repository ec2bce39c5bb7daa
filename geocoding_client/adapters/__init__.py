"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the client to the outside world:
- HTTP transports (requests, static canned replies)
- Provider response decoding (Maps.co)
"""
