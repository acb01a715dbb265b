"""
Project proxy routes.

Routes:
- GET /projects, POST /projects
- GET /projects/{id}, PATCH /projects/{id}, DELETE /projects/{id}
- GET /projects/{id}/issues, POST /projects/{id}/issues

Dependencies: fastapi, httpx, vtasker.gateway
System role: Project proxy
"""

import logging

from fastapi import APIRouter, Depends, Request
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

router = APIRouter(prefix="/projects", tags=["projects"])

ISSUE_FILTERS = ("status", "priority", "search")


@router.get("")
async def list_projects(
    request: Request,
    upstream: UpstreamClient = Depends(get_upstream),
) -> JSONResponse:
    try:
        response = await upstream.request(
            "GET",
            "/projects",
            authorization=resolve_authorization(request),
            params=dict(request.query_params),
        )
        if not response.is_success:
            return error_response(
                extract_error_message(response, "Failed to fetch projects"),
                response.status_code,
            )
        return passthrough(response)
    except Exception as e:
        log_exception_with_context(logger, "Error fetching projects", e)
        return error_response("Failed to fetch projects", 500)


@router.post("")
async def create_project(
    request: Request,
    upstream: UpstreamClient = Depends(get_upstream),
) -> JSONResponse:
    """Forward a new project; a name is required."""
    try:
        body = await request.json()
        if not isinstance(body, dict) or not body.get("name"):
            return error_response("Project name is required", 400)

        response = await upstream.request(
            "POST",
            "/projects",
            authorization=resolve_authorization(request),
            json=body,
        )
        if not response.is_success:
            return error_response(
                extract_error_message(response, "Failed to create project"),
                response.status_code,
            )
        return passthrough(response)
    except Exception as e:
        log_exception_with_context(logger, "Error creating project", e)
        return error_response("Failed to create project", 500)


@router.get("/{project_id}")
async def get_project(
    project_id: str,
    request: Request,
    upstream: UpstreamClient = Depends(get_upstream),
) -> JSONResponse:
    try:
        response = await upstream.request(
            "GET",
            f"/projects/{project_id}",
            authorization=resolve_authorization(request),
        )
        if not response.is_success:
            return error_response(
                extract_error_message(response, "Failed to fetch project"),
                response.status_code,
            )
        return passthrough(response)
    except Exception as e:
        log_exception_with_context(logger, "Error fetching project", e, project_id=project_id)
        return error_response("Failed to fetch project", 500)


@router.patch("/{project_id}")
async def update_project(
    project_id: str,
    request: Request,
    upstream: UpstreamClient = Depends(get_upstream),
) -> JSONResponse:
    try:
        body = await request.json()
        response = await upstream.request(
            "PATCH",
            f"/projects/{project_id}",
            authorization=resolve_authorization(request),
            json=body,
        )
        if not response.is_success:
            return error_response(
                extract_error_message(response, "Failed to update project"),
                response.status_code,
            )
        return passthrough(response)
    except Exception as e:
        log_exception_with_context(logger, "Error updating project", e, project_id=project_id)
        return error_response("Failed to update project", 500)


@router.delete("/{project_id}")
async def delete_project(
    project_id: str,
    request: Request,
    upstream: UpstreamClient = Depends(get_upstream),
) -> JSONResponse:
    """
    Archive a project upstream.

    Requires a token; answers {"success": true} on success.
    """
    authorization = resolve_authorization(request)
    if authorization is None:
        logger.warning("Project delete without token", extra={"project_id": project_id})
        return error_response("Unauthorized - No token provided", 401)

    try:
        response = await upstream.request(
            "DELETE",
            f"/projects/{project_id}",
            authorization=authorization,
        )
        if not response.is_success:
            message = extract_error_message(response, "Failed to delete project")
            logger.error(
                "Delete project failed upstream",
                extra={"project_id": project_id, "status_code": response.status_code, "error": message},
            )
            return error_response(message, response.status_code)
        return JSONResponse(content={"success": True})
    except Exception as e:
        log_exception_with_context(logger, "Error deleting project", e, project_id=project_id)
        return error_response("Failed to delete project", 500)


@router.get("/{project_id}/issues")
async def list_project_issues(
    project_id: str,
    request: Request,
    upstream: UpstreamClient = Depends(get_upstream),
) -> JSONResponse:
    """Issues of one project; project_id always comes from the path."""
    query = request.query_params
    params = {
        "project_id": project_id,
        "page": query.get("page") or "1",
        "page_size": query.get("page_size") or "10",
    }
    for key in ISSUE_FILTERS:
        if query.get(key):
            params[key] = query[key]

    try:
        response = await upstream.request(
            "GET",
            "/issues",
            authorization=resolve_authorization(request),
            params=params,
        )
        if not response.is_success:
            logger.error(
                "Fetching project issues failed upstream",
                extra={"project_id": project_id, "status_code": response.status_code},
            )
            return error_response("Failed to fetch issues", 500)
        return passthrough(response)
    except Exception as e:
        log_exception_with_context(logger, "Error fetching issues", e, project_id=project_id)
        return error_response("Failed to fetch issues", 500)


@router.post("/{project_id}/issues")
async def create_project_issue(
    project_id: str,
    request: Request,
    upstream: UpstreamClient = Depends(get_upstream),
) -> JSONResponse:
    try:
        body = await request.json()
        payload = {**(body if isinstance(body, dict) else {}), "project_id": project_id}
        response = await upstream.request(
            "POST",
            "/issues",
            authorization=resolve_authorization(request),
            json=payload,
        )
        if not response.is_success:
            logger.error(
                "Creating issue failed upstream",
                extra={"project_id": project_id, "status_code": response.status_code},
            )
            return error_response("Failed to create issue", 500)
        return passthrough(response, status_code=201)
    except Exception as e:
        log_exception_with_context(logger, "Error creating issue", e, project_id=project_id)
        return error_response("Failed to create issue", 500)
