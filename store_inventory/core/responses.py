import math
from typing import Any, List

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit) or 1


def success(data: Any, message: str, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(
        {"status": "success", "data": jsonable_encoder(data), "message": message},
        status_code=status_code,
    )


def paginated(data: List[Any], page: int, limit: int, total: int, message: str) -> JSONResponse:
    return JSONResponse(
        {
            "status": "success",
            "data": jsonable_encoder(data),
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "pages": page_count(total, limit),
            },
            "message": message,
        }
    )


def deleted(message: str) -> JSONResponse:
    return JSONResponse({"status": "success", "message": message})
