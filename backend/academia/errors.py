"""Errors raised by the REST resources and their JSON rendering."""

from fastapi import Request
from fastapi.responses import JSONResponse

from .utils.headers import create_failure_alert


class BadRequestAlertError(Exception):
    """A client error tied to an entity, reported as HTTP 400.

    `error_key` is a short token (`idexists`, `idnull`, `idnoexists`...)
    the frontend uses to pick a translated message.
    """

    def __init__(self, message: str, entity_name: str, error_key: str):
        super().__init__(message)
        self.message = message
        self.entity_name = entity_name
        self.error_key = error_key

    def to_problem(self) -> dict:
        return {
            'title': self.message,
            'status': 400,
            'entityName': self.entity_name,
            'errorKey': self.error_key,
            'message': f'error.{self.error_key}',
            'params': self.entity_name,
        }


async def bad_request_alert_handler(request: Request, exc: BadRequestAlertError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=exc.to_problem(),
        headers=create_failure_alert(exc.entity_name, exc.error_key),
    )
