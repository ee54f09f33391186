"""
Core Services Module

Session, route guard, dashboard and the content managers behind each admin screen.
"""

from .auth_service import AuthSessionHolder
from .contact_manager import ContactManager
from .dashboard_service import DashboardService
from .entity_manager import EntityManager, OperationResult
from .home_manager import HomeContentManager
from .messages_manager import MessagesManager
from .orders_manager import OrdersManager
from .packages_manager import PackagesManager
from .portfolio_manager import PortfolioManager
from .reviews_manager import ReviewsManager
from .services_manager import ServicesManager
from .team_manager import TeamManager

__all__ = [
    "AuthSessionHolder",
    "ContactManager",
    "DashboardService",
    "EntityManager",
    "OperationResult",
    "HomeContentManager",
    "MessagesManager",
    "OrdersManager",
    "PackagesManager",
    "PortfolioManager",
    "ReviewsManager",
    "ServicesManager",
    "TeamManager",
]
