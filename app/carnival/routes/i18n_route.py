from fastapi import APIRouter

from carnival.controller.i18n import SUPPORTED_LANGUAGES, is_supported, translation_table
from carnival.response_model import ResponseModel, ErrorResponseModel

router = APIRouter()


# ----------------------- GET Languages -----------------------
@router.get("", response_description="Supported languages")
async def get_languages():
    return ResponseModel({"languages": SUPPORTED_LANGUAGES})


# ----------------------- GET Translations -----------------------
@router.get("/{language}", response_description="Translation table with English fallback")
async def get_translations(language: str):
    if not is_supported(language):
        return ErrorResponseModel(f"Unsupported language '{language}'", 404, "UNSUPPORTED_LANGUAGE")
    return ResponseModel({"language": language, "translations": translation_table(language)})


__all__ = ["router"]
