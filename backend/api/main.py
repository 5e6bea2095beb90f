import time
import asyncio
from typing import Any, Dict, List, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from backend.core import settings
from backend.engine.attendance import AttendanceProjection, format_projection
from backend.engine.fetch import AttendanceStoreClient
from backend.engine.records import (
    CourseAttendanceRecord,
    InvalidFieldValueError,
    RecordNotFoundError,
    UnknownFieldError,
)
from backend.engine.session import AttendanceSession
from backend.engine.stream import app_logger


router = APIRouter()

# Single tracking session for the process, created on first use
_session: Optional[AttendanceSession] = None


class APIResponse:
    """Standardized API response wrapper for all clients"""

    @staticmethod
    def success(data: Any, code: str = "success", message: str = "Operation successful") -> Dict[str, Any]:
        return {
            "success": True,
            "code": code,
            "message": message,
            "data": data,
            "timestamp": time.time(),
        }

    @staticmethod
    def error(error_type: str, details: str, code: str = "error", status_code: int = 400) -> Tuple[Dict[str, Any], int]:
        response = {
            "success": False,
            "code": code,
            "message": f"{error_type}: {details}",
            "data": None,
            "timestamp": time.time(),
        }
        return response, status_code


class FieldUpdateRequest(BaseModel):
    """Request model for assigning a record field from user input."""

    field: str = Field(..., min_length=1, description="course_label/courseCode, conducted or absent")
    # Left untyped so booleans and other raw input reach the count parser
    value: Any = Field(None, description="Raw value as typed by the user")


class FieldAdjustRequest(BaseModel):
    """Request model for incrementing or decrementing a count."""

    field: str = Field(..., min_length=1, description="conducted or absent")
    delta: int = Field(1, description="Amount to add; negative values decrement")


async def get_session() -> AttendanceSession:
    global _session

    if _session is None:
        session = AttendanceSession(
            AttendanceStoreClient(settings.STORE_BASE_URL),
            threshold=settings.ATTENDANCE_THRESHOLD,
        )
        # Store I/O is blocking; keep it off the event loop
        await asyncio.get_event_loop().run_in_executor(None, session.load)
        _session = session

    return _session


def _serialize_entry(
    index: int, record: CourseAttendanceRecord, projection: AttendanceProjection
) -> Dict[str, Any]:
    return {
        "index": index,
        "courseCode": record.course_label,
        "conducted": record.conducted,
        "absent": record.absent,
        "attended": projection.attended,
        "projection": {
            "current_percentage": projection.current_percentage,
            "max_additional_skips": projection.max_additional_skips,
            "classes_needed_to_recover": projection.classes_needed_to_recover,
            "projected_percentage": projection.projected_percentage,
        },
        "display": format_projection(projection),
    }


def _edit_error(error: Exception) -> HTTPException:
    if isinstance(error, RecordNotFoundError):
        response, status_code = APIResponse.error(
            error_type="NotFound",
            details=str(error),
            code="record_not_found",
            status_code=status.HTTP_404_NOT_FOUND,
        )
    elif isinstance(error, UnknownFieldError):
        response, status_code = APIResponse.error(
            error_type="ValidationError",
            details=str(error),
            code="unknown_field",
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    else:
        response, status_code = APIResponse.error(
            error_type="ValidationError",
            details=str(error),
            code="invalid_value",
            status_code=422,
        )
    return HTTPException(status_code=status_code, detail=response)


@router.get("/healthcheck")
async def healthcheck() -> Dict[str, Any]:
    return APIResponse.success(
        data={"status": "healthy"},
        code="healthcheck_ok",
        message="Service is healthy and operational",
    )


@router.get("/attendance")
async def list_attendance(session: AttendanceSession = Depends(get_session)) -> Dict[str, Any]:
    entries: List[Dict[str, Any]] = [
        _serialize_entry(index, record, projection)
        for index, (record, projection) in enumerate(session.entries())
    ]
    return APIResponse.success(
        data={"threshold": session.threshold, "subjects": entries},
        code="attendance_retrieved",
        message=f"{len(entries)} attendance records",
    )


@router.post("/attendance/save")
async def save_attendance(session: AttendanceSession = Depends(get_session)):
    notification = await asyncio.get_event_loop().run_in_executor(None, session.save)

    if notification.success:
        return APIResponse.success(
            data={"notification": notification.message},
            code="attendance_saved",
            message=notification.message,
        )

    response_payload, status_code = APIResponse.error(
        error_type="StoreError",
        details=notification.message,
        code="save_failed",
        status_code=status.HTTP_502_BAD_GATEWAY,
    )
    return JSONResponse(content=response_payload, status_code=status_code)


@router.put("/attendance/{index}")
async def update_field(
    index: int,
    request: FieldUpdateRequest,
    session: AttendanceSession = Depends(get_session),
) -> Dict[str, Any]:
    try:
        session.set_field(index, request.field, request.value)
    except (RecordNotFoundError, UnknownFieldError, InvalidFieldValueError) as error:
        app_logger.warning(f"Rejected edit of record {index}: {error}")
        raise _edit_error(error)

    return APIResponse.success(
        data=_serialize_entry(index, session.records[index], session.projection(index)),
        code="record_updated",
        message=f"Updated {request.field} of record {index}",
    )


@router.post("/attendance/{index}/adjust")
async def adjust_field(
    index: int,
    request: FieldAdjustRequest,
    session: AttendanceSession = Depends(get_session),
) -> Dict[str, Any]:
    try:
        session.adjust_field(index, request.field, request.delta)
    except (RecordNotFoundError, UnknownFieldError, InvalidFieldValueError) as error:
        app_logger.warning(f"Rejected adjustment of record {index}: {error}")
        raise _edit_error(error)

    return APIResponse.success(
        data=_serialize_entry(index, session.records[index], session.projection(index)),
        code="record_adjusted",
        message=f"Adjusted {request.field} of record {index} by {request.delta}",
    )
