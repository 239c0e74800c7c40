"""
Meter gateway - HTTP forwarding gateway for the smart hourly portal.

Relays browser requests to the authentication, client-registry and
meter-report services, forwarding the caller's bearer token.
"""

__version__ = "0.1.0"
