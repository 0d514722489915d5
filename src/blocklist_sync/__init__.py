"""
Синхронизация блокировок доменов Mastodon с JSON-блоклистом.
"""

__version__ = "0.1.0"
