from fastapi import APIRouter

from api.v1.endpoints import blog
from api.v1.endpoints.admin import role_access
from api.v1.endpoints.users import user_management
from core.config import settings

api_router = APIRouter(prefix=settings.API_V1_STR)


# Role Access Endpoints
api_router.include_router(
    role_access.router, prefix="/role-access", tags=["Role Access"]
)

# User Endpoints
api_router.include_router(
    user_management.router, prefix="/users", tags=["Users"]
)

# Blog Endpoints
api_router.include_router(blog.router, prefix="/blog", tags=["Blog"])
