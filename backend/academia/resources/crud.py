"""Standard REST endpoints shared by every entity.

`register_crud_routes` adds the five usual handlers to a router:

- POST   /<entities>       create; 400 `idexists` when the body has an id
- PUT    /<entities>       update; 400 `idnull` when the body has no id
- GET    /<entities>       list everything
- GET    /<entities>/{id}  one row or 404 with an empty body
- DELETE /<entities>/{id}  delete; 200 even if the row did not exist, 400
                           `idinuse` while other rows still reference it

Create and update answer 400 `idnoexists` when a foreign key in the body
names a row that does not exist.

Routes with a fixed segment after the collection (`/alumnos/carreras`)
must be added to the router before calling it, otherwise
`/<entities>/{id}` swallows them.
"""

import logging
from typing import List, Type

from fastapi import APIRouter, Depends, Response
from sqlmodel import Session, SQLModel

from ..config import settings
from ..database import get_session
from ..errors import BadRequestAlertError
from ..repositories import MissingReferenceError, ReferencedEntityError
from ..schemas import EntitySchema
from ..services import CrudService
from ..utils import headers

logger = logging.getLogger("academia.api")


def register_crud_routes(router: APIRouter, *, path: str, entity_name: str, model: Type[SQLModel],
                         schema: Type[EntitySchema], service_class: Type[CrudService],
                         include_list: bool = True) -> APIRouter:
    """Attach create/update/list/get/delete handlers for `model` to `router`."""
    label = model.__name__

    def to_entity(payload: EntitySchema) -> SQLModel:
        return model(**payload.model_dump())

    def save(db: Session, payload: EntitySchema) -> SQLModel:
        try:
            return service_class(db).save(to_entity(payload))
        except MissingReferenceError as exc:
            raise BadRequestAlertError(f"No existe {exc.target} con id {exc.value}", entity_name, "idnoexists") from exc

    @router.post(path, status_code=201, response_model=schema, name=f"create_{entity_name}")
    def create(payload: schema, response: Response, db: Session = Depends(get_session)):
        logger.debug("REST request to save %s : %s", label, payload)
        if payload.id is not None:
            raise BadRequestAlertError(f"A new {entity_name} cannot already have an ID", entity_name, "idexists")
        result = save(db, payload)
        response.headers['Location'] = f"{settings.API_PREFIX}{path}/{result.id}"
        response.headers.update(headers.create_entity_creation_alert(entity_name, result.id))
        return result

    @router.put(path, response_model=schema, name=f"update_{entity_name}")
    def update(payload: schema, response: Response, db: Session = Depends(get_session)):
        logger.debug("REST request to update %s : %s", label, payload)
        if payload.id is None:
            raise BadRequestAlertError("Invalid id", entity_name, "idnull")
        result = save(db, payload)
        response.headers.update(headers.create_entity_update_alert(entity_name, payload.id))
        return result

    if include_list:
        @router.get(path, response_model=List[schema], name=f"list_{entity_name}")
        def list_all(db: Session = Depends(get_session)):
            logger.debug("REST request to get all %ss", label)
            return service_class(db).find_all()

    @router.get(f"{path}/{{entity_id}}", response_model=schema, name=f"get_{entity_name}",
                responses={404: {"description": f"{label} not found"}})
    def get_one(entity_id: int, db: Session = Depends(get_session)):
        logger.debug("REST request to get %s : %s", label, entity_id)
        entity = service_class(db).find_one(entity_id)
        if entity is None:
            return Response(status_code=404)
        return entity

    @router.delete(f"{path}/{{entity_id}}", name=f"delete_{entity_name}")
    def delete(entity_id: int, db: Session = Depends(get_session)):
        logger.debug("REST request to delete %s : %s", label, entity_id)
        try:
            service_class(db).delete(entity_id)
        except ReferencedEntityError as exc:
            raise BadRequestAlertError(f"{label} {entity_id} todavía está referenciado", entity_name, "idinuse") from exc
        return Response(status_code=200, headers=headers.create_entity_deletion_alert(entity_name, entity_id))

    return router
