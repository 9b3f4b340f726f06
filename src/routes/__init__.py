from routes.contact import contact_bp
from routes.dashboard import dashboard_bp
from routes.menu import menu_bp
from routes.orders import orders_bp
from routes.stats import stats_bp

__all__ = ["contact_bp", "menu_bp", "orders_bp", "stats_bp", "dashboard_bp"]
