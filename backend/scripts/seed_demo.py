"""CLI script to load demo data into the backend DB.
Usage: python scripts/seed_demo.py [--password PASSWORD]

Creates an admin, a department administrator and a student account plus
a small department/course/colloquium graph. Running it twice is safe:
existing logins are left untouched.
"""
import sys
import argparse
import pathlib
from datetime import date, timedelta
# Ensure `backend/` is on sys.path so `academia` imports work when running this script directly
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
from sqlmodel import Session
from academia.auth import Authorities
from academia.database import engine, create_db_and_tables
from academia import models, repositories, services


def _user(session: Session, login: str, password: str, authorities) -> models.User:
    existing = repositories.UserRepository(session).get_by_login(login)
    if existing:
        print(f'User {login} already exists (id {existing.id})')
        return existing
    user = services.AuthService(session).register(login, password, authorities=authorities)
    print(f'Created user {login} (id {user.id})')
    return user


def main(password: str = 'demo'):
    """Create the demo accounts and records.

    Results are printed to stdout for a quick CLI feedback loop.
    """
    create_db_and_tables()
    with Session(engine) as session:
        _user(session, 'admin', password, [Authorities.ADMIN, Authorities.USER])
        adm = _user(session, 'admdpto', password, [Authorities.ADM_DPTO, Authorities.USER])
        alu = _user(session, 'alumno', password, [Authorities.ALUMNO, Authorities.USER])

        if repositories.AlumnoRepository(session).get_by_user_id(alu.id):
            print('Demo records already loaded')
            return

        computacion = repositories.DepartamentoRepository(session).save(models.Departamento(nombre='Computación', codigo=75))
        repositories.DepartamentoRepository(session).save(models.Departamento(nombre='Matemática', codigo=61))
        repositories.AdministradorDepartamentoRepository(session).save(
            models.AdministradorDepartamento(user_id=adm.id, departamento_id=computacion.id))

        algoritmos = repositories.MateriaRepository(session).save(
            models.Materia(nombre='Algoritmos y Programación I', codigo=7540, creditos=6, departamento_id=computacion.id))
        periodo = repositories.PeriodoRepository(session).save(
            models.Periodo(cuatrimestre=models.Cuatrimestre.PRIMERO, anio=str(date.today().year)))
        curso = repositories.CursoRepository(session).save(
            models.Curso(docente='Essaya', capacidad=40, vacantes=40, materia_id=algoritmos.id, periodo_id=periodo.id))
        for offset in (-14, 7, 21):
            repositories.ColoquioRepository(session).save(
                models.Coloquio(curso_id=curso.id, fecha=date.today() + timedelta(days=offset), aula='200', sede='PC'))

        carrera = repositories.CarreraRepository(session).save(models.Carrera(nombre='Ingeniería en Informática', codigo=10))
        alumno = repositories.AlumnoRepository(session).save(
            models.Alumno(nombre='Ada', apellido='Lovelace', padron=100000, prioridad=1, user_id=alu.id))
        repositories.AlumnoCarreraRepository(session).save(
            models.AlumnoCarrera(alumno_id=alumno.id, carrera_id=carrera.id, fecha_inscripcion=date.today()))
        repositories.CursadaRepository(session).save(models.Cursada(alumno_id=alumno.id, curso_id=curso.id))
        print(f'Loaded demo records: departamento {computacion.id}, curso {curso.id}, alumno {alumno.id}')


if __name__ == '__main__':
    parser = argparse.ArgumentParser()
    parser.add_argument('--password', default='demo', help='Password for the demo accounts')
    args = parser.parse_args()
    main(password=args.password)
