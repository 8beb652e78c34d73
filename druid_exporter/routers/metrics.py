import logging
from fastapi import APIRouter, HTTPException, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from ..models import HealthResponse
from ..services.druid_client import DruidQueryError

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/metrics")
def get_metrics(request: Request):
    state = request.app.state
    try:
        payload = generate_latest(state.registry)
    except DruidQueryError as exc:
        logger.critical(
            "Scrape failed: %s", exc,
            extra={"error_class": type(exc).__name__, "druid_uri": exc.uri},
        )
        if state.settings.exit_on_error:
            state.terminate(1)
        raise HTTPException(status_code=503, detail=f"{type(exc).__name__}: {exc}")
    return Response(content=payload, media_type=CONTENT_TYPE_LATEST)

@router.get("/healthz", response_model=HealthResponse)
def healthz():
    return HealthResponse(ok=True)
