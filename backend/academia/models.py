"""SQLModel data models.

This module defines the application's database tables using SQLModel.
Each class maps to a table and uses relationships where appropriate.

Entities keep pydantic's default equality. Comparing two rows by
identity goes through `entity_key`/`same_entity`, which refuse to work
on instances that were never persisted.
"""

import enum
from datetime import date, datetime, timezone
from typing import List, NamedTuple, Optional

from sqlmodel import Field, Relationship, SQLModel


class Cuatrimestre(str, enum.Enum):
    PRIMERO = "PRIMERO"
    SEGUNDO = "SEGUNDO"
    VERANO = "VERANO"


class ColoquioEstado(str, enum.Enum):
    ACTIVO = "ACTIVO"
    CANCELADO = "CANCELADO"


class CursadaEstado(str, enum.Enum):
    ACTIVA = "ACTIVA"
    APROBADA = "APROBADA"
    DESAPROBADA = "DESAPROBADA"
    ABANDONADA = "ABANDONADA"


class UserAuthority(SQLModel, table=True):
    """Link table between users and their granted authorities."""
    user_id: Optional[int] = Field(default=None, foreign_key='user.id', primary_key=True)
    authority_name: Optional[str] = Field(default=None, foreign_key='authority.name', primary_key=True)


class Authority(SQLModel, table=True):
    """A role name such as `ROLE_ADMIN`."""
    name: str = Field(primary_key=True, max_length=50)


class User(SQLModel, table=True):
    """A platform account.

    Fields:
    - `login`: unique login name
    - `password_hash`: hashed password string (never store plaintext)
    - `authorities`: granted roles, see `academia.auth.Authorities`
    """
    id: Optional[int] = Field(default=None, primary_key=True)
    login: str = Field(index=True, nullable=False, unique=True)
    password_hash: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    activated: bool = True
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    authorities: List[Authority] = Relationship(link_model=UserAuthority)

    def has_authority(self, name: str) -> bool:
        return any(a.name == name for a in self.authorities)


class Departamento(SQLModel, table=True):
    """An academic department owning a set of subjects.

    `materias` and `Materia.departamento` are the two ends of one
    relationship; SQLAlchemy keeps them in sync, so the helpers below only
    touch the subject side.
    """
    id: Optional[int] = Field(default=None, primary_key=True)
    nombre: str = Field(nullable=False)
    codigo: int = Field(nullable=False)
    materias: List['Materia'] = Relationship(back_populates='departamento')

    def add_materia(self, materia: 'Materia') -> 'Departamento':
        materia.departamento = self
        return self

    def remove_materia(self, materia: 'Materia') -> 'Departamento':
        if materia.departamento is self:
            materia.departamento = None
        return self


class Materia(SQLModel, table=True):
    """A subject taught by a department."""
    id: Optional[int] = Field(default=None, primary_key=True)
    nombre: str
    codigo: int
    creditos: Optional[int] = None
    departamento_id: Optional[int] = Field(default=None, foreign_key='departamento.id', index=True)
    departamento: Optional[Departamento] = Relationship(back_populates='materias')


class Periodo(SQLModel, table=True):
    """An academic term (year plus semester)."""
    id: Optional[int] = Field(default=None, primary_key=True)
    cuatrimestre: Optional[Cuatrimestre] = None
    anio: Optional[str] = None


class Curso(SQLModel, table=True):
    """A course offering of a subject during a term."""
    id: Optional[int] = Field(default=None, primary_key=True)
    docente: Optional[str] = None
    capacidad: Optional[int] = None
    vacantes: Optional[int] = None
    materia_id: Optional[int] = Field(default=None, foreign_key='materia.id', index=True)
    periodo_id: Optional[int] = Field(default=None, foreign_key='periodo.id')


class Coloquio(SQLModel, table=True):
    """A colloquium (oral exam) scheduled for a course."""
    id: Optional[int] = Field(default=None, primary_key=True)
    curso_id: int = Field(foreign_key='curso.id', index=True)
    fecha: date
    hora_inicio: Optional[str] = None
    hora_fin: Optional[str] = None
    aula: Optional[str] = None
    sede: Optional[str] = None
    estado: ColoquioEstado = ColoquioEstado.ACTIVO


class Carrera(SQLModel, table=True):
    """A degree programme."""
    id: Optional[int] = Field(default=None, primary_key=True)
    nombre: str
    codigo: Optional[int] = None


class Alumno(SQLModel, table=True):
    """A student. `user_id` ties the record to the login account."""
    id: Optional[int] = Field(default=None, primary_key=True)
    nombre: str
    apellido: str
    padron: int
    prioridad: Optional[int] = None
    user_id: Optional[int] = Field(default=None, foreign_key='user.id', unique=True, index=True)


class AlumnoCarrera(SQLModel, table=True):
    """Enrolment of a student in a degree programme."""
    id: Optional[int] = Field(default=None, primary_key=True)
    alumno_id: int = Field(foreign_key='alumno.id', index=True)
    carrera_id: int = Field(foreign_key='carrera.id')
    fecha_inscripcion: Optional[date] = None
    carrera: Optional[Carrera] = Relationship()


class Cursada(SQLModel, table=True):
    """A student taking a course."""
    id: Optional[int] = Field(default=None, primary_key=True)
    alumno_id: int = Field(foreign_key='alumno.id', index=True)
    curso_id: int = Field(foreign_key='curso.id')
    estado: CursadaEstado = CursadaEstado.ACTIVA
    nota_cursada: Optional[int] = None
    nota_final: Optional[int] = None


class AdministradorDepartamento(SQLModel, table=True):
    """Grants a user administrative rights over one department."""
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key='user.id', index=True)
    departamento_id: int = Field(foreign_key='departamento.id')


class UnsavedEntityError(ValueError):
    """Raised when identity is requested for an entity without an id."""


class EntityKey(NamedTuple):
    kind: str
    id: int


def entity_key(entity: SQLModel) -> EntityKey:
    """Return the identity of a persisted entity.

    Transient instances have no identity yet; asking for one raises
    `UnsavedEntityError` instead of silently colliding with every other
    unsaved row.
    """
    entity_id = getattr(entity, 'id', None)
    if entity_id is None:
        raise UnsavedEntityError(f"{type(entity).__name__} has not been persisted yet")
    return EntityKey(type(entity).__name__, entity_id)


def same_entity(a: SQLModel, b: SQLModel) -> bool:
    """True when `a` and `b` are the same persisted row."""
    return entity_key(a) == entity_key(b)
