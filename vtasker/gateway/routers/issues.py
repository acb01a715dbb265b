"""
Issue proxy routes.

Routes:
- GET /issues, POST /issues
- GET /issues/{id}, PUT /issues/{id}, DELETE /issues/{id}

Dependencies: fastapi, httpx, vtasker.gateway
System role: Issue proxy
"""

import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from vtasker.gateway.headers import resolve_authorization
from vtasker.gateway.upstream import (
    UpstreamClient,
    error_response,
    extract_error_message,
    get_upstream,
    passthrough,
)
from vtasker.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/issues", tags=["issues"])

FORWARDED_FILTERS = ("status", "priority", "project_id", "assignee_id", "page", "page_size")


@router.get("")
async def list_issues(
    request: Request,
    upstream: UpstreamClient = Depends(get_upstream),
) -> JSONResponse:
    """Forward the supported filters only."""
    query = request.query_params
    params = {key: query[key] for key in FORWARDED_FILTERS if query.get(key)}
    try:
        response = await upstream.request(
            "GET",
            "/issues",
            authorization=resolve_authorization(request),
            params=params,
        )
        if not response.is_success:
            logger.error("Fetching issues failed upstream", extra={"status_code": response.status_code})
            return error_response("Failed to fetch issues", 500)
        return passthrough(response)
    except Exception as e:
        log_exception_with_context(logger, "Error fetching issues", e)
        return error_response("Failed to fetch issues", 500)


@router.post("")
async def create_issue(
    request: Request,
    upstream: UpstreamClient = Depends(get_upstream),
) -> JSONResponse:
    try:
        body = await request.json()
        response = await upstream.request(
            "POST",
            "/issues",
            authorization=resolve_authorization(request),
            json=body,
        )
        if not response.is_success:
            return error_response(
                extract_error_message(response, "Failed to create issue"),
                response.status_code,
            )
        return passthrough(response)
    except Exception as e:
        log_exception_with_context(logger, "Error creating issue", e)
        return error_response("Failed to create issue", 500)


@router.get("/{issue_id}")
async def get_issue(
    issue_id: str,
    request: Request,
    upstream: UpstreamClient = Depends(get_upstream),
) -> JSONResponse:
    try:
        response = await upstream.request(
            "GET",
            f"/issues/{issue_id}",
            authorization=resolve_authorization(request),
        )
        response.raise_for_status()
        return passthrough(response)
    except Exception as e:
        log_exception_with_context(logger, "Error fetching issue", e, issue_id=issue_id)
        return error_response("Failed to fetch issue", 500)


@router.put("/{issue_id}")
async def update_issue(
    issue_id: str,
    request: Request,
    upstream: UpstreamClient = Depends(get_upstream),
) -> JSONResponse:
    try:
        body = await request.json()
        response = await upstream.request(
            "PUT",
            f"/issues/{issue_id}",
            authorization=resolve_authorization(request),
            json=body,
        )
        response.raise_for_status()
        return passthrough(response)
    except Exception as e:
        log_exception_with_context(logger, "Error updating issue", e, issue_id=issue_id)
        return error_response("Failed to update issue", 500)


@router.delete("/{issue_id}", response_model=None)
async def delete_issue(
    issue_id: str,
    request: Request,
    upstream: UpstreamClient = Depends(get_upstream),
) -> Response:
    try:
        response = await upstream.request(
            "DELETE",
            f"/issues/{issue_id}",
            authorization=resolve_authorization(request),
        )
        response.raise_for_status()
        return Response(status_code=204)
    except Exception as e:
        log_exception_with_context(logger, "Error deleting issue", e, issue_id=issue_id)
        return error_response("Failed to delete issue", 500)
