"""
HTTP transport for the sheet access service.

Translates JSON requests into AccessService calls and maps structured
error kinds onto HTTP status codes.
"""

import logging

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse

from ..access.permissions import ShareRole, SheetAccess, SheetView
from ..exceptions import ErrorKind, SheetAccessError
from ..service import AccessService
from .schemas import Credentials, RevokeRequest, SessionRequest, ShareRequest

logger = logging.getLogger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.ALREADY_EXISTS: 409,
    ErrorKind.ALREADY_LOGGED_IN: 409,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.NO_SHARING_RECORD: 404,
    ErrorKind.NO_ACCESS_TO_REVOKE: 404,
    ErrorKind.BAD_CREDENTIAL: 401,
    ErrorKind.NOT_LOGGED_IN: 401,
    ErrorKind.SELF_SHARE: 400,
    ErrorKind.INVALID_ROLE: 400,
    ErrorKind.VALIDATION: 400,
}


def describe_sheet(view: SheetView) -> str:
    """Human-readable label for a listed sheet."""
    if view.access is SheetAccess.OWNER:
        return f"{view.owner}'s own sheet"
    return f"{view.owner}'s sheet ({view.access.value})"


def get_service(request: Request) -> AccessService:
    """Get the service instance attached to the application."""
    return request.app.state.service


async def handle_access_error(request: Request, exc: SheetAccessError) -> JSONResponse:
    status = STATUS_BY_KIND.get(exc.kind, 400)
    logger.info(
        f"{request.method} {request.url.path} -> {status} {exc.kind.value}",
        extra={"event": "request_rejected", "status": status},
    )
    return JSONResponse(
        status_code=status,
        content={"error": exc.kind.value, "detail": exc.message},
    )


def create_app(service: AccessService) -> FastAPI:
    """Build the FastAPI application around an explicitly constructed service."""
    app = FastAPI(
        title="Sheet Access Service",
        description="Accounts, sessions and per-owner sheet sharing.",
        version="0.1.0",
    )
    app.state.service = service
    app.add_exception_handler(SheetAccessError, handle_access_error)

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    @app.post("/signup")
    def signup(payload: Credentials, service: AccessService = Depends(get_service)):
        service.register(payload.username, payload.password)
        return {
            "status": "ok",
            "username": payload.username,
            "logged_in": service.is_logged_in(payload.username),
        }

    @app.post("/login")
    def login(payload: Credentials, service: AccessService = Depends(get_service)):
        service.authenticate(payload.username, payload.password)
        return {"status": "ok", "username": payload.username}

    @app.post("/logout")
    def logout(payload: SessionRequest, service: AccessService = Depends(get_service)):
        service.end_session(payload.username)
        return {"status": "ok", "username": payload.username}

    @app.post("/share")
    def share(payload: ShareRequest, service: AccessService = Depends(get_service)):
        role = ShareRole.parse(payload.role)
        service.grant_role(payload.username, payload.target_user, role)
        return {
            "status": "ok",
            "owner": payload.username,
            "target": payload.target_user,
            "role": role.value,
        }

    @app.post("/revoke")
    def revoke(payload: RevokeRequest, service: AccessService = Depends(get_service)):
        service.revoke(payload.username, payload.target_user)
        return {"status": "ok", "owner": payload.username, "target": payload.target_user}

    @app.get("/sheets")
    def sheets(
        username: str = Query(..., min_length=1, description="Account to list sheets for"),
        service: AccessService = Depends(get_service),
    ):
        views = service.list_sheets(username)
        return {
            "username": username,
            "sheets": [
                {"owner": v.owner, "access": v.access.value, "label": describe_sheet(v)}
                for v in views
            ],
        }

    return app
