# Core modules

from .config import Settings, get_settings, settings
from .session import Brand, SessionManager, ShopSession

__all__ = ["Settings", "get_settings", "settings", "Brand", "SessionManager", "ShopSession"]
