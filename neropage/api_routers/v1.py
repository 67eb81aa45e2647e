from fastapi import APIRouter

from neropage.features.analytics.routes.analytics import router as analytics_router
from neropage.features.auth.routes.auth import router as auth_router
from neropage.features.content_blocks.routes.content_blocks import router as content_blocks_router
from neropage.features.csrf.routes.csrf import router as csrf_router
from neropage.features.forms.routes.form_submissions import router as form_submissions_router
from neropage.features.link_groups.routes.link_groups import router as link_groups_router
from neropage.features.links.routes.links import router as links_router
from neropage.features.profiles.routes.profiles import router as profiles_router
from neropage.features.uploads.routes.uploads import router as uploads_router

api_router = APIRouter()

# Register all feature routes
api_router.include_router(csrf_router)
api_router.include_router(auth_router)
api_router.include_router(profiles_router)
api_router.include_router(links_router)
api_router.include_router(link_groups_router)
api_router.include_router(content_blocks_router)
api_router.include_router(form_submissions_router)
api_router.include_router(analytics_router)
api_router.include_router(uploads_router)
