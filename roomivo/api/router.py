from fastapi import APIRouter

from roomivo.api.routers import (
    applications,
    auth,
    contracts,
    images,
    matches,
    messages,
    properties,
    realtime,
    roles,
    users,
)

api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(roles.router)
api_router.include_router(properties.router)
api_router.include_router(matches.router)
api_router.include_router(applications.router)
api_router.include_router(contracts.router)
api_router.include_router(messages.router)
api_router.include_router(images.router)
api_router.include_router(realtime.router)
