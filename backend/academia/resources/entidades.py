"""REST controllers for the entities that only need the standard routes."""

from fastapi import APIRouter, Depends

from .. import models, schemas, services
from ..auth import get_current_user
from .crud import register_crud_routes

router = APIRouter(dependencies=[Depends(get_current_user)])

ENTIDADES = (
    ('/materias', 'materia', models.Materia, schemas.MateriaSchema, services.MateriaService),
    ('/periodos', 'periodo', models.Periodo, schemas.PeriodoSchema, services.PeriodoService),
    ('/coloquios', 'coloquio', models.Coloquio, schemas.ColoquioSchema, services.ColoquioService),
    ('/carreras', 'carrera', models.Carrera, schemas.CarreraSchema, services.CarreraService),
    ('/alumno-carreras', 'alumnoCarrera', models.AlumnoCarrera, schemas.AlumnoCarreraSchema,
     services.AlumnoCarreraService),
    ('/cursadas', 'cursada', models.Cursada, schemas.CursadaSchema, services.CursadaService),
    ('/administrador-departamentos', 'administradorDepartamento', models.AdministradorDepartamento,
     schemas.AdministradorDepartamentoSchema, services.AdministradorDepartamentoService),
)

for path, entity_name, model, schema, service_class in ENTIDADES:
    register_crud_routes(
        router,
        path=path,
        entity_name=entity_name,
        model=model,
        schema=schema,
        service_class=service_class,
    )
