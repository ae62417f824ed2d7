from reqdash.core.config import Settings
from reqdash.services.dashboard import DashboardSession

settings = Settings()
dashboard = DashboardSession(settings=settings)

def get_dashboard() -> DashboardSession:
    return dashboard
