"""Pydantic request/response schemas used by the API.

Schemas keep API input/output shapes stable and provide validation for
controller handlers and tests. Entity schemas are used in both
directions: `id` is absent on create and set everywhere else.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from .models import ColoquioEstado, Cuatrimestre, CursadaEstado


class RegisterIn(BaseModel):
    """Payload for the account registration endpoint."""
    login: str
    password: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None


class LoginIn(BaseModel):
    """Credentials for `/authenticate`."""
    username: str
    password: str


class TokenOut(BaseModel):
    """Authentication response containing an access token."""
    id_token: str


class AccountOut(BaseModel):
    id: int
    login: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    activated: bool
    authorities: List[str]


class EntitySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None


class DepartamentoSchema(EntitySchema):
    nombre: str
    codigo: int


class MateriaSchema(EntitySchema):
    nombre: str
    codigo: int
    creditos: Optional[int] = None
    departamento_id: Optional[int] = None


class PeriodoSchema(EntitySchema):
    cuatrimestre: Optional[Cuatrimestre] = None
    anio: Optional[str] = None


class CursoSchema(EntitySchema):
    docente: Optional[str] = None
    capacidad: Optional[int] = None
    vacantes: Optional[int] = None
    materia_id: Optional[int] = None
    periodo_id: Optional[int] = None


class ColoquioSchema(EntitySchema):
    curso_id: int
    fecha: date
    hora_inicio: Optional[str] = None
    hora_fin: Optional[str] = None
    aula: Optional[str] = None
    sede: Optional[str] = None
    estado: ColoquioEstado = ColoquioEstado.ACTIVO


class CarreraSchema(EntitySchema):
    nombre: str
    codigo: Optional[int] = None


class AlumnoSchema(EntitySchema):
    nombre: str
    apellido: str
    padron: int
    prioridad: Optional[int] = None
    user_id: Optional[int] = None


class AlumnoCarreraSchema(EntitySchema):
    alumno_id: int
    carrera_id: int
    fecha_inscripcion: Optional[date] = None


class CursadaSchema(EntitySchema):
    alumno_id: int
    curso_id: int
    estado: CursadaEstado = CursadaEstado.ACTIVA
    nota_cursada: Optional[int] = None
    nota_final: Optional[int] = None


class AdministradorDepartamentoSchema(EntitySchema):
    user_id: int
    departamento_id: int
