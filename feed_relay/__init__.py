"""
Feed Relay - Forward unposted feed items from a backend API to Discord.

A Python application that polls a backend HTTP API for feed items that
have not been posted yet, sends each one to a Discord channel as an embed,
and acknowledges delivered items back to the backend.
"""

__version__ = "1.0.0"
