"""
Services Layer

Provides business logic services organized into Core and Mail modules.
Core services hold the session and the content managers behind each admin screen.
Mail services implement the reply email function.
"""

__all__ = []
