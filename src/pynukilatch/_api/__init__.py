"""Endpoint modules for the Nuki bridge HTTP API.

Internal to pynukilatch; use :class:`pynukilatch.client.NukiBridgeClient`.
"""
