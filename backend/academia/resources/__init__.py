"""HTTP resources. `api_router` is mounted under `settings.API_PREFIX`."""

from fastapi import APIRouter

from . import account, alumnos, cursos, departamentos, entidades

api_router = APIRouter()
api_router.include_router(account.router)
api_router.include_router(alumnos.router)
api_router.include_router(cursos.router)
api_router.include_router(departamentos.router)
api_router.include_router(entidades.router)
