# app/modules/router.py
from fastapi import APIRouter

from app.modules.aioverview.api.router import router as aioverview_router

router = APIRouter()
router.include_router(aioverview_router)
