from datetime import date

from academia import models, repositories


def _curso_con_coloquios(session):
    curso = repositories.CursoRepository(session).save(models.Curso(docente='Mendez', capacidad=30, vacantes=30))
    otro = repositories.CursoRepository(session).save(models.Curso(docente='Calvo'))
    repo = repositories.ColoquioRepository(session)
    repo.save(models.Coloquio(curso_id=curso.id, fecha=date(2024, 3, 1)))
    repo.save(models.Coloquio(curso_id=curso.id, fecha=date(2024, 7, 15)))
    repo.save(models.Coloquio(curso_id=curso.id, fecha=date(2024, 5, 10)))
    repo.save(models.Coloquio(curso_id=curso.id, fecha=date(2024, 6, 1), estado=models.ColoquioEstado.CANCELADO))
    repo.save(models.Coloquio(curso_id=otro.id, fecha=date(2024, 8, 1)))
    return curso


def test_curso_crud(client, headers):
    r = client.post('/api/cursos', json={'docente': 'Mendez', 'capacidad': 30}, headers=headers)
    assert r.status_code == 201
    curso = r.json()
    assert client.get(f"/api/cursos/{curso['id']}", headers=headers).json()['docente'] == 'Mendez'
    r = client.put('/api/cursos', json={**curso, 'vacantes': 12}, headers=headers)
    assert r.status_code == 200
    assert r.json()['vacantes'] == 12
    assert client.post('/api/cursos', json={**curso}, headers=headers).status_code == 400
    assert client.delete(f"/api/cursos/{curso['id']}", headers=headers).status_code == 200
    assert client.get('/api/cursos', headers=headers).json() == []


def test_coloquios_of_unknown_curso_is_bad_request(client, headers):
    r = client.get('/api/cursos/12345/coloquios', headers=headers)
    assert r.status_code == 400
    assert r.json()['entityName'] == 'Curso'
    assert r.json()['errorKey'] == 'idnoexists'


def test_coloquios_of_curso_active_newest_first(client, session, headers):
    curso = _curso_con_coloquios(session)
    r = client.get(f'/api/cursos/{curso.id}/coloquios', headers=headers)
    assert r.status_code == 200
    assert [c['fecha'] for c in r.json()] == ['2024-07-15', '2024-05-10', '2024-03-01']
    assert {c['estado'] for c in r.json()} == {'ACTIVO'}


def test_coloquios_of_curso_from_date(client, session, headers):
    curso = _curso_con_coloquios(session)
    r = client.get(f'/api/cursos/{curso.id}/coloquios', params={'desde': '2024-05-10'}, headers=headers)
    assert r.status_code == 200
    assert [c['fecha'] for c in r.json()] == ['2024-07-15', '2024-05-10']


def test_coloquios_of_curso_without_any(client, session, headers):
    curso = repositories.CursoRepository(session).save(models.Curso(docente='Sin coloquios'))
    r = client.get(f'/api/cursos/{curso.id}/coloquios', headers=headers)
    assert r.status_code == 200
    assert r.json() == []


def test_coloquio_crud_validates_payload(client, session, headers):
    curso = repositories.CursoRepository(session).save(models.Curso(docente='Mendez'))
    r = client.post('/api/coloquios', json={'curso_id': curso.id, 'fecha': '2024-12-01', 'aula': '302'},
                    headers=headers)
    assert r.status_code == 201
    assert r.json()['estado'] == 'ACTIVO'
    bad = client.post('/api/coloquios', json={'curso_id': curso.id, 'fecha': '2024-12-01', 'estado': 'POSTERGADO'},
                      headers=headers)
    assert bad.status_code == 422


def test_coloquio_for_unknown_curso_is_bad_request(client, headers):
    r = client.post('/api/coloquios', json={'curso_id': 9999, 'fecha': '2024-12-01'}, headers=headers)
    assert r.status_code == 400
    assert r.json()['entityName'] == 'coloquio'
    assert r.json()['errorKey'] == 'idnoexists'
    assert r.headers['X-academiaApp-error'] == 'error.idnoexists'
    assert client.get('/api/coloquios', headers=headers).json() == []


def test_coloquio_update_to_unknown_curso_is_bad_request(client, session, headers):
    curso = repositories.CursoRepository(session).save(models.Curso(docente='Mendez'))
    coloquio = client.post('/api/coloquios', json={'curso_id': curso.id, 'fecha': '2024-12-01'},
                           headers=headers).json()
    r = client.put('/api/coloquios', json={**coloquio, 'curso_id': 9999}, headers=headers)
    assert r.status_code == 400
    assert r.json()['errorKey'] == 'idnoexists'
    assert client.get(f"/api/coloquios/{coloquio['id']}", headers=headers).json()['curso_id'] == curso.id


def test_delete_curso_with_coloquios_is_bad_request(client, session, headers):
    curso = _curso_con_coloquios(session)
    r = client.delete(f'/api/cursos/{curso.id}', headers=headers)
    assert r.status_code == 400
    assert r.json()['errorKey'] == 'idinuse'
    assert client.get(f'/api/cursos/{curso.id}', headers=headers).status_code == 200
    assert len(client.get(f'/api/cursos/{curso.id}/coloquios', headers=headers).json()) == 3
