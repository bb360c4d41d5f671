"""REST controller for managing Alumno.

Besides the CRUD routes, a logged-in student can list their degree
programmes and their active enrolments.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlmodel import Session

from .. import models, services
from ..auth import get_current_user
from ..database import get_session
from ..errors import BadRequestAlertError
from ..schemas import AlumnoSchema, CarreraSchema, CursadaSchema
from .crud import register_crud_routes

logger = logging.getLogger("academia.api")

router = APIRouter(tags=["alumnos"], dependencies=[Depends(get_current_user)])


def _alumno_del_usuario(user: models.User, db: Session) -> models.Alumno:
    alumno = services.AlumnoService(db).find_one_by_user_id(user.id)
    if alumno is None:
        raise BadRequestAlertError("No existe un Alumno asociado al usuario logueado", "Alumno", "idnoexists")
    return alumno


@router.get('/alumnos/carreras', response_model=List[CarreraSchema])
def get_carreras_del_alumno(user: models.User = Depends(get_current_user), db: Session = Depends(get_session)):
    """Degree programmes of the student linked to the current user."""
    logger.debug("REST request to get all Carreras del Alumno")
    alumno = _alumno_del_usuario(user, db)
    return services.AlumnoCarreraService(db).find_carreras_by_alumno(alumno)


@router.get('/alumnos/cursadasActivas', response_model=List[CursadaSchema])
def get_cursadas_activas_del_alumno(user: models.User = Depends(get_current_user), db: Session = Depends(get_session)):
    """Active enrolments of the student linked to the current user."""
    logger.debug("REST request to get Cursadas activas del Alumno")
    alumno = _alumno_del_usuario(user, db)
    return services.CursadaService(db).find_cursadas_activas_by_alumno(alumno)


register_crud_routes(
    router,
    path='/alumnos',
    entity_name='alumno',
    model=models.Alumno,
    schema=AlumnoSchema,
    service_class=services.AlumnoService,
)
