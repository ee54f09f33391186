"""
Data Gateway Infrastructure Module

Provides the abstracted hosted-backend interface: rows, object storage and auth.
"""

from .base import (
    AuthInterface,
    AuthSession,
    DataGatewayInterface,
    GatewayConfig,
    Principal,
    Row,
    RowId,
)
from .supabase_adapter import SupabaseAdapter
from .factory import GatewayFactory

__all__ = [
    'AuthInterface',
    'AuthSession',
    'DataGatewayInterface',
    'GatewayConfig',
    'Principal',
    'Row',
    'RowId',
    'SupabaseAdapter',
    'GatewayFactory'
]
