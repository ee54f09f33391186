"""
Data Gateway Factory

Creates the gateway adapter based on configuration.
"""

from typing import Optional

from app.core.config import settings
from .base import DataGatewayInterface, GatewayConfig
from .supabase_adapter import SupabaseAdapter


class GatewayFactory:
    """Factory for creating data gateway instances"""

    @staticmethod
    def create_gateway(
        gateway_type: str = "supabase",
        config: Optional[GatewayConfig] = None
    ) -> DataGatewayInterface:
        """
        Create data gateway instance based on type

        Args:
            gateway_type: Type of hosted backend
            config: Optional custom configuration

        Returns:
            DataGatewayInterface implementation

        Raises:
            ConfigurationError: hosting credentials are missing
        """
        if config is None:
            config = GatewayFactory._get_default_config(gateway_type)

        if gateway_type.lower() == "supabase":
            return SupabaseAdapter(config)
        else:
            raise ValueError(f"Unsupported gateway type: {gateway_type}")

    @staticmethod
    def _get_default_config(gateway_type: str) -> GatewayConfig:
        """Get default configuration from settings"""
        if gateway_type.lower() == "supabase":
            settings.require_hosting_credentials()
            return GatewayConfig(
                url=settings.SUPABASE_URL,
                anon_key=settings.SUPABASE_ANON_KEY,
                bucket=settings.STORAGE_BUCKET,
            )
        else:
            raise ValueError(f"No default configuration for gateway type: {gateway_type}")

    @staticmethod
    def get_default_gateway() -> DataGatewayInterface:
        """Get default gateway instance (Supabase)"""
        return GatewayFactory.create_gateway("supabase")
