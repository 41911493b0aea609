"""
HTTP routes for the Calabozos class API.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from calabozos.dependencies import (
    get_query_facade,
    get_repository,
    get_sync_service,
    require_api_token,
)
from calabozos.db import ClassRepository
from calabozos.facade import ClassQueryFacade
from calabozos.schemas import (
    ClassListData,
    ClassListResponse,
    ClassSummary,
    DetailResponse,
    ErrorResponse,
)
from calabozos.sync import ClassSyncService
from shared.types import ClassRecord
from upstream.dnd_api import (
    InvalidArgument,
    InvalidUpstreamResponse,
    UpstreamConnectionError,
)

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_api_token)])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def error_response(message: str, status_code: int = 500) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content=ErrorResponse(message=message).model_dump()
    )


def _class_list(records: list[ClassRecord]) -> ClassListResponse:
    return ClassListResponse(
        data=ClassListData(
            classes=[ClassSummary(**record.as_row_dict()) for record in records]
        )
    )


def _detail(
    index: str,
    key: str,
    label: str,
    fetch: Callable[[str], Optional[Any]],
):
    try:
        data = fetch(index)
    except InvalidArgument as e:
        return error_response(str(e), 400)
    except (UpstreamConnectionError, InvalidUpstreamResponse) as e:
        logger.exception("Error retrieving %s for class %s", label, index)
        return error_response(f"Failed to retrieve {label}: {e}")

    if data is None or data == {}:
        return error_response(f"{label.capitalize()} not found", 404)
    return DetailResponse(data={key: data})


@router.get("/classes", response_model=ClassListResponse, responses=_ERROR_RESPONSES)
def list_classes(service: ClassSyncService = Depends(get_sync_service)):
    """
    Sync every upstream class into the local store and return the stored records.
    """
    try:
        records = service.sync_all()
    except (UpstreamConnectionError, InvalidUpstreamResponse) as e:
        logger.exception("Error retrieving classes")
        return error_response(f"Failed to retrieve classes: {e}")
    return _class_list(records)


@router.get("/stored-classes", response_model=ClassListResponse)
def list_stored_classes(repository: ClassRepository = Depends(get_repository)):
    return _class_list(repository.all())


@router.get(
    "/classes/{index}", response_model=DetailResponse, responses=_ERROR_RESPONSES
)
def get_class(index: str, facade: ClassQueryFacade = Depends(get_query_facade)):
    return _detail(index, "class", "class details", facade.detail)


@router.get(
    "/classes/{index}/spellcasting",
    response_model=DetailResponse,
    responses=_ERROR_RESPONSES,
)
def get_class_spellcasting(
    index: str, facade: ClassQueryFacade = Depends(get_query_facade)
):
    return _detail(
        index, "spellcasting", "spellcasting information", facade.spellcasting
    )


@router.get(
    "/classes/{index}/multiclassing",
    response_model=DetailResponse,
    responses=_ERROR_RESPONSES,
)
def get_class_multiclassing(
    index: str, facade: ClassQueryFacade = Depends(get_query_facade)
):
    return _detail(
        index, "multiclassing", "multiclassing information", facade.multiclassing
    )


@router.get(
    "/classes/{index}/subclasses",
    response_model=DetailResponse,
    responses=_ERROR_RESPONSES,
)
def get_class_subclasses(
    index: str, facade: ClassQueryFacade = Depends(get_query_facade)
):
    return _detail(index, "subclasses", "subclasses", facade.subclasses)


@router.get(
    "/classes/{index}/spells",
    response_model=DetailResponse,
    responses=_ERROR_RESPONSES,
)
def get_class_spells(index: str, facade: ClassQueryFacade = Depends(get_query_facade)):
    return _detail(index, "spells", "spells", facade.spells)


@router.get(
    "/classes/{index}/features",
    response_model=DetailResponse,
    responses=_ERROR_RESPONSES,
)
def get_class_features(
    index: str, facade: ClassQueryFacade = Depends(get_query_facade)
):
    return _detail(index, "features", "features", facade.features)


@router.get(
    "/classes/{index}/proficiencies",
    response_model=DetailResponse,
    responses=_ERROR_RESPONSES,
)
def get_class_proficiencies(
    index: str, facade: ClassQueryFacade = Depends(get_query_facade)
):
    return _detail(index, "proficiencies", "proficiencies", facade.proficiencies)
