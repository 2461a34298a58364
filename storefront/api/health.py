from fastapi import APIRouter, Request

from storefront.schemas.health import HealthResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/health-check",
    response_model=HealthResponse,
    summary="Health check",
    description="Report service name, version and build date."
)
def health_check(request: Request):
    """Simple health check."""
    settings = request.app.state.settings
    return HealthResponse(
        version=settings.VERSION,
        build_date=settings.BUILD_DATE,
        service_name=settings.SERVICE_NAME,
    )
