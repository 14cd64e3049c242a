"""Роутер документации: Swagger UI в корне по статическому OpenAPI-документу"""
from fastapi import APIRouter
from fastapi.openapi.docs import get_swagger_ui_html

from userstub.config import OPENAPI_DOCUMENT

router = APIRouter(tags=["docs"])


@router.get("/", include_in_schema=False)
async def swagger_ui():
    return get_swagger_ui_html(
        openapi_url=f"/static/{OPENAPI_DOCUMENT}",
        title="User Stub API - Swagger UI",
    )
