# backend/routers/__init__.py

from .files import router as files_router
from .users import router as users_router
