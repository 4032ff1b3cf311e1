"""
Backend package: Flask JSON API over the authenticator generator.
"""

from .app import app

__all__ = ['app']
