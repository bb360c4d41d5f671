"""Repository classes encapsulating database operations.

Each repository is small and focused on a single aggregate. Repositories
return SQLModel objects and perform commits/refreshes where appropriate;
finder methods are plain queries and never modify state.
"""

from datetime import date
from typing import Generic, List, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, SQLModel, select

from . import models

DEFAULT_AUTHORITIES = ('ROLE_ADMIN', 'ROLE_USER', 'ROLE_ADM_DPTO', 'ROLE_ALUMNO', 'ROLE_PROFESOR')

T = TypeVar('T', bound=SQLModel)


class MissingReferenceError(LookupError):
    """An entity points at a row that does not exist."""

    def __init__(self, field: str, target: str, value):
        super().__init__(f"{field}={value} does not match any {target}")
        self.field = field
        self.target = target
        self.value = value


class ReferencedEntityError(Exception):
    """A row cannot be deleted because other rows still point at it."""

    def __init__(self, kind: str, entity_id):
        super().__init__(f"{kind} {entity_id} is still referenced")
        self.kind = kind
        self.entity_id = entity_id


class CrudRepository(Generic[T]):
    """Generic save/get/list/delete operations for one table."""
    model: Type[T]

    def __init__(self, session: Session):
        self.session = session

    def save(self, entity: T) -> T:
        """Insert or update `entity` and return the managed instance.

        `merge` looks the primary key up first, so an entity without id
        (or with an unknown one) is inserted and a known id is updated.
        """
        managed = self.session.merge(entity)
        self.session.commit()
        self.session.refresh(managed)
        return managed

    def missing_reference(self, entity: T) -> Optional[MissingReferenceError]:
        """Return the first foreign key of `entity` that points nowhere.

        Null references are allowed; nullability is the schema's concern.
        """
        for fk in sorted(self.model.__table__.foreign_keys, key=lambda fk: fk.parent.name):
            value = getattr(entity, fk.parent.name, None)
            if value is None:
                continue
            stmt = select(fk.column).where(fk.column == value)
            if self.session.exec(stmt).first() is None:
                return MissingReferenceError(fk.parent.name, fk.column.table.name, value)
        return None

    def get(self, entity_id) -> Optional[T]:
        """Fetch a row by primary key or `None`."""
        return self.session.get(self.model, entity_id)

    def list_all(self) -> List[T]:
        stmt = select(self.model).order_by(self.model.id)
        return self.session.exec(stmt).all()

    def delete_by_id(self, entity_id) -> None:
        """Delete the row with `entity_id`; missing rows are ignored.

        Raises `ReferencedEntityError` when the database refuses because
        other rows still reference it.
        """
        entity = self.get(entity_id)
        if entity is None:
            return
        self.session.delete(entity)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ReferencedEntityError(self.model.__name__, entity_id) from exc


class UserRepository:
    """CRUD operations for `User` objects."""
    def __init__(self, session: Session):
        self.session = session

    def create(self, user: models.User) -> models.User:
        """Persist a new user and return the managed instance."""
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user

    def get_by_login(self, login: str) -> Optional[models.User]:
        """Return a `User` by login or `None` if not found."""
        stmt = select(models.User).where(models.User.login == login)
        return self.session.exec(stmt).first()

    def get(self, user_id: int) -> Optional[models.User]:
        """Get a `User` by primary key."""
        return self.session.get(models.User, user_id)


class AuthorityRepository:
    """Lookups for the fixed set of role names."""
    def __init__(self, session: Session):
        self.session = session

    def get(self, name: str) -> Optional[models.Authority]:
        return self.session.get(models.Authority, name)

    def ensure_defaults(self) -> None:
        """Insert any of `DEFAULT_AUTHORITIES` missing from the table."""
        missing = [name for name in DEFAULT_AUTHORITIES if self.get(name) is None]
        for name in missing:
            self.session.add(models.Authority(name=name))
        if missing:
            self.session.commit()


class DepartamentoRepository(CrudRepository[models.Departamento]):
    model = models.Departamento


class MateriaRepository(CrudRepository[models.Materia]):
    model = models.Materia

    def list_by_departamento(self, departamento: models.Departamento) -> List[models.Materia]:
        stmt = select(models.Materia).where(models.Materia.departamento_id == departamento.id)
        return self.session.exec(stmt).all()


class PeriodoRepository(CrudRepository[models.Periodo]):
    model = models.Periodo


class CursoRepository(CrudRepository[models.Curso]):
    model = models.Curso


class ColoquioRepository(CrudRepository[models.Coloquio]):
    """Colloquium queries. Results are ordered by `fecha` descending only;
    rows sharing a date come back in whatever order the database picks."""
    model = models.Coloquio

    def list_by_curso_fecha_desde_and_estado(self, curso: models.Curso, fecha: date,
                                             estado: models.ColoquioEstado) -> List[models.Coloquio]:
        """Colloquia of `curso` on or after `fecha` with the given `estado`."""
        stmt = select(models.Coloquio).where(
            models.Coloquio.curso_id == curso.id,
            models.Coloquio.fecha >= fecha,
            models.Coloquio.estado == estado
        ).order_by(models.Coloquio.fecha.desc())
        return self.session.exec(stmt).all()

    def list_by_curso_and_estado(self, curso: models.Curso, estado: models.ColoquioEstado) -> List[models.Coloquio]:
        """Colloquia of `curso` with the given `estado`, newest first."""
        stmt = select(models.Coloquio).where(
            models.Coloquio.curso_id == curso.id,
            models.Coloquio.estado == estado
        ).order_by(models.Coloquio.fecha.desc())
        return self.session.exec(stmt).all()


class CarreraRepository(CrudRepository[models.Carrera]):
    model = models.Carrera


class AlumnoRepository(CrudRepository[models.Alumno]):
    model = models.Alumno

    def get_by_user_id(self, user_id: int) -> Optional[models.Alumno]:
        """Return the student linked to the login account `user_id`."""
        stmt = select(models.Alumno).where(models.Alumno.user_id == user_id)
        return self.session.exec(stmt).first()


class AlumnoCarreraRepository(CrudRepository[models.AlumnoCarrera]):
    model = models.AlumnoCarrera

    def list_by_alumno(self, alumno: models.Alumno) -> List[models.AlumnoCarrera]:
        stmt = select(models.AlumnoCarrera).where(
            models.AlumnoCarrera.alumno_id == alumno.id
        ).order_by(models.AlumnoCarrera.id)
        return self.session.exec(stmt).all()


class CursadaRepository(CrudRepository[models.Cursada]):
    model = models.Cursada

    def list_by_alumno_and_estado(self, alumno: models.Alumno, estado: models.CursadaEstado) -> List[models.Cursada]:
        stmt = select(models.Cursada).where(
            models.Cursada.alumno_id == alumno.id,
            models.Cursada.estado == estado
        ).order_by(models.Cursada.id)
        return self.session.exec(stmt).all()


class AdministradorDepartamentoRepository(CrudRepository[models.AdministradorDepartamento]):
    model = models.AdministradorDepartamento

    def get_by_user_id(self, user_id: int) -> Optional[models.AdministradorDepartamento]:
        """Return the department administration held by `user_id`, if any."""
        stmt = select(models.AdministradorDepartamento).where(
            models.AdministradorDepartamento.user_id == user_id
        ).order_by(models.AdministradorDepartamento.id)
        return self.session.exec(stmt).first()
