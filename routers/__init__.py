# routers/__init__.py

from .auth import router as auth_router
from .members import router as members_router
from .attendance import router as attendance_router
from .donations import router as donations_router
from .visitors import router as visitors_router
from .equipment import router as equipment_router
from .templates import router as templates_router
from .users import router as users_router
from .dashboard import router as dashboard_router
from .data import router as data_router
from .health import router as health_router


ALL_ROUTERS = [
    auth_router,
    members_router,
    attendance_router,
    donations_router,
    visitors_router,
    equipment_router,
    templates_router,
    users_router,
    dashboard_router,
    data_router,
    health_router,
]

__all__ = ["ALL_ROUTERS"]
