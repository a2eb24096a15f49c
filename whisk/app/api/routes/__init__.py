from fastapi import APIRouter

from whisk.app.api.routes import chat, recipes

api_router = APIRouter()
api_router.include_router(recipes.router)
api_router.include_router(chat.router)
