"""
Target result endpoints.

A target takes exactly one result, of its own type.
"""

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_current_owner_id, get_target_service
from app.schemas.target import PaperResultCreate, SessionTargetResponse, TacticalResultCreate
from app.services.target_service import TargetService

router = APIRouter()


@router.post("/{target_id}/paper-result", summary="Attach a paper result.", response_model=SessionTargetResponse,
             status_code=status.HTTP_201_CREATED, )
def attach_paper_result(target_id: int, data: PaperResultCreate, owner_id: int = Depends(get_current_owner_id),
                        service: TargetService = Depends(get_target_service), ):
    return service.attach_paper_result(owner_id, target_id, data)


@router.post("/{target_id}/tactical-result", summary="Attach a tactical result.",
             response_model=SessionTargetResponse, status_code=status.HTTP_201_CREATED, )
def attach_tactical_result(target_id: int, data: TacticalResultCreate, owner_id: int = Depends(get_current_owner_id),
                           service: TargetService = Depends(get_target_service), ):
    return service.attach_tactical_result(owner_id, target_id, data)
