# routers/__init__.py

from .access import router as access_router
from .health import router as health_router
