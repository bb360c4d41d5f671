"""REST controller for managing Curso and listing its colloquia."""

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlmodel import Session

from .. import models, services
from ..auth import get_current_user
from ..database import get_session
from ..errors import BadRequestAlertError
from ..schemas import ColoquioSchema, CursoSchema
from .crud import register_crud_routes

logger = logging.getLogger("academia.api")

router = APIRouter(tags=["cursos"], dependencies=[Depends(get_current_user)])

register_crud_routes(
    router,
    path='/cursos',
    entity_name='curso',
    model=models.Curso,
    schema=CursoSchema,
    service_class=services.CursoService,
)


@router.get('/cursos/{curso_id}/coloquios', response_model=List[ColoquioSchema])
def get_coloquios_by_curso(curso_id: int, desde: Optional[date] = None, db: Session = Depends(get_session)):
    """Active colloquia of a course, newest first.

    `desde` restricts the list to colloquia on or after that date. An
    unknown course is a client error, not an empty list.
    """
    logger.debug("REST request to get all Coloquios by curso %s", curso_id)
    curso = services.CursoService(db).find_one(curso_id)
    if curso is None:
        raise BadRequestAlertError("No existe el curso con id provisto", "Curso", "idnoexists")
    coloquios = services.ColoquioService(db)
    if desde is not None:
        return coloquios.find_proximos_by_curso(curso, desde)
    return coloquios.find_all_by_curso(curso)
