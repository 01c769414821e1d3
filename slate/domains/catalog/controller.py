"""Model catalog API controller."""

from fastapi import APIRouter, Depends

from slate.core.dependencies import get_catalog_service, get_client_state
from slate.core.state import ClientState
from slate.domains.catalog.service import ModelCatalogService
from slate.schemas.catalog import ModelCatalogResponse


router = APIRouter(prefix="/api/models", tags=["models"])


@router.get("", response_model=ModelCatalogResponse)
async def list_models(state: ClientState = Depends(get_client_state)):
    """Get the models available for the active provider."""
    return ModelCatalogResponse(
        provider=state.selected_provider,
        is_loading=state.is_loading_models,
        models=state.available_models,
    )


@router.post("/refresh", response_model=ModelCatalogResponse)
async def refresh_models(
    state: ClientState = Depends(get_client_state),
    service: ModelCatalogService = Depends(get_catalog_service),
):
    """Fetch the catalog again; falls back to the built-in list on any failure."""
    models = await service.refresh()
    return ModelCatalogResponse(
        provider=state.selected_provider,
        is_loading=state.is_loading_models,
        models=models,
    )
