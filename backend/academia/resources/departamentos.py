"""REST controller for managing Departamento.

Listing is role aware: a department administrator only gets the
department they administer.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlmodel import Session

from .. import models, services
from ..auth import get_current_user
from ..database import get_session
from ..schemas import DepartamentoSchema
from .crud import register_crud_routes

logger = logging.getLogger("academia.api")

router = APIRouter(tags=["departamentos"], dependencies=[Depends(get_current_user)])


@router.get('/departamentos', response_model=List[DepartamentoSchema])
def get_all_departamentos(user: models.User = Depends(get_current_user), db: Session = Depends(get_session)):
    logger.debug("REST request to get all Departamentos")
    return services.DepartamentoService(db).find_all_for_user(user)


register_crud_routes(
    router,
    path='/departamentos',
    entity_name='departamento',
    model=models.Departamento,
    schema=DepartamentoSchema,
    service_class=services.DepartamentoService,
    include_list=False,
)
