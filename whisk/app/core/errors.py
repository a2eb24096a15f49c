from typing import Any, Dict, List, Optional, Union

from fastapi import Request
from fastapi.responses import JSONResponse


class ApiError(Exception):
    """An error rendered as ``{"error", "message", "code", ...}`` with a status code."""

    def __init__(
        self,
        status_code: int,
        code: str,
        error: str,
        message: str,
        details: Optional[Union[str, List[str]]] = None,
        suggestion: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.error = error
        self.message = message
        self.details = details
        self.suggestion = suggestion
        self.extra = extra or {}

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error, "message": self.message, "code": self.code}
        if self.details is not None:
            body["details"] = self.details
        if self.suggestion:
            body["suggestion"] = self.suggestion
        body.update(self.extra)
        return body


def blocked_by_firewall(url: str, reason: Optional[str]) -> ApiError:
    return ApiError(
        status_code=403,
        code="BLOCKED_BY_FIREWALL",
        error="Website Access Blocked",
        message=reason or "Website blocked the request.",
        suggestion=(
            "This website uses anti-bot protection. You can manually copy and paste the "
            "recipe content, or try a different recipe URL."
        ),
        extra={"blocked_url": url},
    )


def extraction_failed(reason: Optional[str]) -> ApiError:
    return ApiError(
        status_code=422,
        code="EXTRACTION_FAILED",
        error="Recipe Extraction Failed",
        message=(
            "Could not extract recipe content from this webpage. The page might not contain "
            "a recipe, or the content is not accessible."
        ),
        details=reason,
        suggestion="Try a different recipe URL or manually input the recipe.",
    )


def validation_failed(errors: List[str]) -> ApiError:
    return ApiError(
        status_code=422,
        code="VALIDATION_ERROR",
        error="Incomplete Recipe Data",
        message="The recipe data is missing required fields.",
        details=list(errors),
    )


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
