"""Settings controller endpoints for provider selection and keys."""

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status

from slate.core.dependencies import get_catalog_service, get_settings_service
from slate.domains.catalog.service import ModelCatalogService
from slate.domains.settings.service import SettingsService
from slate.schemas.settings import SettingsResponse, SettingsUpdate


router = APIRouter(prefix="/api/settings", tags=["Settings"])


@router.get("", response_model=SettingsResponse)
async def get_settings(service: SettingsService = Depends(get_settings_service)):
    """Get the active provider and which keys are set (keys are masked)."""
    return SettingsResponse.from_credentials(service.get_settings())


@router.patch("", response_model=SettingsResponse)
async def update_settings(
    update_data: SettingsUpdate,
    background_tasks: BackgroundTasks,
    service: SettingsService = Depends(get_settings_service),
    catalog: ModelCatalogService = Depends(get_catalog_service),
):
    """Edit keys or switch provider.

    Changes live in memory until ``POST /api/settings/save``. Switching
    provider, or changing its key, refreshes the model catalog.
    """
    catalog_stale = service.update_settings(
        openai_key=update_data.openai_key,
        openrouter_key=update_data.openrouter_key,
        selected_provider=update_data.selected_provider,
    )
    if catalog_stale:
        background_tasks.add_task(catalog.refresh)

    return SettingsResponse.from_credentials(service.get_settings())


@router.post("/save", response_model=SettingsResponse)
async def save_settings(service: SettingsService = Depends(get_settings_service)):
    """Persist the current settings; called when the settings screen closes."""
    try:
        service.save()
    except OSError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to save settings: {str(e)}",
        ) from e

    return SettingsResponse.from_credentials(service.get_settings())
