# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: static-site rebuild trigger."""

from fastapi import APIRouter, Depends, HTTPException

from studio.core.dependencies import get_build_trigger
from studio.schemas.portal import BuildTriggerRequest
from studio.services.build_trigger import BuildTrigger, BuildTriggerError

router = APIRouter(prefix="/api/v1", tags=["Build"])


@router.post("/build/trigger", status_code=202)
def trigger_build(
    payload: BuildTriggerRequest,
    trigger: BuildTrigger = Depends(get_build_trigger),
):
    try:
        return trigger.trigger(payload.reason)
    except RuntimeError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except BuildTriggerError as e:
        raise HTTPException(status_code=502, detail=str(e))
