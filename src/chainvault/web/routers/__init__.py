from chainvault.web.routers.admin import router as admin_router
from chainvault.web.routers.auth import router as auth_router
from chainvault.web.routers.files import router as files_router
from chainvault.web.routers.profile import router as profile_router

__all__ = [
    "admin_router",
    "auth_router",
    "files_router",
    "profile_router",
]
