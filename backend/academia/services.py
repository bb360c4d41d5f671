"""Business logic services used by HTTP controllers.

This module holds small service classes that coordinate repositories.
Services are intentionally thin: most of them hand the entity straight
to the repository. The few cross-entity lookups (careers or active
enrolments of a student, colloquia of a course) and the department
visibility rule live here so they can be tested without HTTP.
"""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Generic, Iterable, List, Optional, Sequence, Type, TypeVar

from passlib.context import CryptContext
import jwt
from sqlmodel import Session, SQLModel

from . import models, repositories
from .auth import Authorities, is_user_in_role
from .config import settings

PWD_CTX = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

logger = logging.getLogger("academia.services")

T = TypeVar('T', bound=SQLModel)


class CrudService(Generic[T]):
    """save/find_one/find_all/delete on top of one repository."""
    repository_class: Type[repositories.CrudRepository]

    def __init__(self, session: Session):
        self.session = session
        self.repo = self.repository_class(session)

    def save(self, entity: T) -> T:
        """Persist `entity`; the repository decides insert or update.

        Raises `repositories.MissingReferenceError` when a foreign key of
        `entity` names a row that does not exist.
        """
        missing = self.repo.missing_reference(entity)
        if missing is not None:
            raise missing
        return self.repo.save(entity)

    def find_one(self, entity_id: int) -> Optional[T]:
        return self.repo.get(entity_id)

    def find_all(self) -> List[T]:
        return self.repo.list_all()

    def delete(self, entity_id: int) -> None:
        """Delete by id. Unknown ids are not an error; rows other rows still
        point at raise `repositories.ReferencedEntityError`."""
        logger.debug("Request to delete %s : %s", self.repo.model.__name__, entity_id)
        self.repo.delete_by_id(entity_id)


class AuthService:
    """Authentication related operations (register + authenticate)."""
    def __init__(self, session: Session):
        self.session = session
        self.user_repo = repositories.UserRepository(session)
        self.authority_repo = repositories.AuthorityRepository(session)

    def register(self, login: str, password: str, authorities: Iterable[str] = (Authorities.USER,),
                 **profile) -> models.User:
        """Create a new user with a hashed password and the given roles.

        Returns the persisted `User` instance. Unknown authority names
        raise ValueError.
        """
        granted = []
        for name in authorities:
            authority = self.authority_repo.get(name)
            if authority is None:
                raise ValueError(f"unknown authority: {name}")
            granted.append(authority)
        user = models.User(login=login.lower(), password_hash=PWD_CTX.hash(password), **profile)
        user.authorities = granted
        user = self.user_repo.create(user)
        logger.info("Created user %s with authorities %s", user.login, [a.name for a in granted])
        return user

    def authenticate(self, login: str, password: str) -> Optional[str]:
        """Verify credentials and return a signed JWT token on success.

        Returns `None` if authentication fails.
        """
        user = self.user_repo.get_by_login(login.lower())
        if not user or not user.activated:
            return None
        if not PWD_CTX.verify(password, user.password_hash):
            return None
        return self.create_token(user)

    @staticmethod
    def create_token(user: models.User) -> str:
        expire = datetime.now(timezone.utc) + timedelta(hours=settings.JWT_EXPIRE_HOURS)
        payload = {
            "user_id": user.id,
            "sub": user.login,
            "auth": ",".join(a.name for a in user.authorities),
            "exp": int(expire.timestamp()),
        }
        return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def departamentos_visibles(user: Optional[models.User],
                           departamentos: Sequence[models.Departamento],
                           administracion: Optional[models.AdministradorDepartamento]) -> List[models.Departamento]:
    """Return the departments `user` is allowed to list.

    Department administrators only see the department linked through
    `administracion` (nothing when they have no link); every other caller
    sees all of `departamentos`.
    """
    if user is None or not is_user_in_role(user, Authorities.ADM_DPTO):
        return list(departamentos)
    if administracion is None:
        return []
    return [d for d in departamentos if d.id == administracion.departamento_id][:1]


class DepartamentoService(CrudService[models.Departamento]):
    repository_class = repositories.DepartamentoRepository

    def __init__(self, session: Session):
        super().__init__(session)
        self.admin_repo = repositories.AdministradorDepartamentoRepository(session)

    def find_all_for_user(self, user: models.User) -> List[models.Departamento]:
        administracion = None
        if is_user_in_role(user, Authorities.ADM_DPTO):
            administracion = self.admin_repo.get_by_user_id(user.id)
        return departamentos_visibles(user, self.find_all(), administracion)


class MateriaService(CrudService[models.Materia]):
    repository_class = repositories.MateriaRepository


class PeriodoService(CrudService[models.Periodo]):
    repository_class = repositories.PeriodoRepository


class CursoService(CrudService[models.Curso]):
    repository_class = repositories.CursoRepository


class ColoquioService(CrudService[models.Coloquio]):
    repository_class = repositories.ColoquioRepository

    def find_all_by_curso(self, curso: models.Curso) -> List[models.Coloquio]:
        """Active colloquia of `curso`, newest first."""
        return self.repo.list_by_curso_and_estado(curso, models.ColoquioEstado.ACTIVO)

    def find_proximos_by_curso(self, curso: models.Curso, desde: date) -> List[models.Coloquio]:
        """Active colloquia of `curso` from `desde` onwards, newest first."""
        return self.repo.list_by_curso_fecha_desde_and_estado(curso, desde, models.ColoquioEstado.ACTIVO)


class CarreraService(CrudService[models.Carrera]):
    repository_class = repositories.CarreraRepository


class AlumnoService(CrudService[models.Alumno]):
    repository_class = repositories.AlumnoRepository

    def find_one_by_user_id(self, user_id: int) -> Optional[models.Alumno]:
        return self.repo.get_by_user_id(user_id)


class AlumnoCarreraService(CrudService[models.AlumnoCarrera]):
    repository_class = repositories.AlumnoCarreraRepository

    def find_carreras_by_alumno(self, alumno: models.Alumno) -> List[models.Carrera]:
        """Degree programmes `alumno` is enrolled in, in enrolment order.

        A programme the student enrolled in twice is listed once.
        """
        carreras = []
        seen = set()
        for inscripcion in self.repo.list_by_alumno(alumno):
            carrera = inscripcion.carrera
            key = models.entity_key(carrera)
            if key in seen:
                continue
            seen.add(key)
            carreras.append(carrera)
        return carreras


class CursadaService(CrudService[models.Cursada]):
    repository_class = repositories.CursadaRepository

    def find_cursadas_activas_by_alumno(self, alumno: models.Alumno) -> List[models.Cursada]:
        return self.repo.list_by_alumno_and_estado(alumno, models.CursadaEstado.ACTIVA)


class AdministradorDepartamentoService(CrudService[models.AdministradorDepartamento]):
    repository_class = repositories.AdministradorDepartamentoRepository
