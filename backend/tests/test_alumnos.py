from academia import models, repositories


ALUMNO = {'nombre': 'Ada', 'apellido': 'Lovelace', 'padron': 100000, 'prioridad': 3}


def test_create_and_read_back(client, headers):
    r = client.post('/api/alumnos', json=ALUMNO, headers=headers)
    assert r.status_code == 201
    created = r.json()
    assert created['id'] is not None
    assert r.headers['Location'] == f"/api/alumnos/{created['id']}"
    assert r.headers['X-academiaApp-alert'] == 'academiaApp.alumno.created'
    assert r.headers['X-academiaApp-params'] == str(created['id'])

    got = client.get(f"/api/alumnos/{created['id']}", headers=headers)
    assert got.status_code == 200
    body = got.json()
    body.pop('id')
    assert body == {**ALUMNO, 'user_id': None}


def test_create_with_id_is_rejected(client, headers):
    r = client.post('/api/alumnos', json={**ALUMNO, 'id': 42}, headers=headers)
    assert r.status_code == 400
    problem = r.json()
    assert problem['entityName'] == 'alumno'
    assert problem['errorKey'] == 'idexists'
    assert r.headers['X-academiaApp-error'] == 'error.idexists'
    assert client.get('/api/alumnos', headers=headers).json() == []


def test_update_requires_id(client, headers):
    created = client.post('/api/alumnos', json=ALUMNO, headers=headers).json()
    r = client.put('/api/alumnos', json={**ALUMNO, 'nombre': 'Grace'}, headers=headers)
    assert r.status_code == 400
    assert r.json()['errorKey'] == 'idnull'
    assert client.get(f"/api/alumnos/{created['id']}", headers=headers).json()['nombre'] == 'Ada'


def test_update_existing(client, headers):
    created = client.post('/api/alumnos', json=ALUMNO, headers=headers).json()
    r = client.put('/api/alumnos', json={**created, 'nombre': 'Grace'}, headers=headers)
    assert r.status_code == 200
    assert r.json()['nombre'] == 'Grace'
    assert r.headers['X-academiaApp-alert'] == 'academiaApp.alumno.updated'
    assert client.get(f"/api/alumnos/{created['id']}", headers=headers).json()['nombre'] == 'Grace'


def test_get_missing_is_404_with_empty_body(client, headers):
    r = client.get('/api/alumnos/999', headers=headers)
    assert r.status_code == 404
    assert r.content == b''


def test_delete_is_idempotent(client, headers):
    created = client.post('/api/alumnos', json=ALUMNO, headers=headers).json()
    r = client.delete(f"/api/alumnos/{created['id']}", headers=headers)
    assert r.status_code == 200
    assert r.headers['X-academiaApp-alert'] == 'academiaApp.alumno.deleted'
    assert client.get(f"/api/alumnos/{created['id']}", headers=headers).status_code == 404
    again = client.delete(f"/api/alumnos/{created['id']}", headers=headers)
    assert again.status_code == 200


def test_list_all(client, headers):
    client.post('/api/alumnos', json=ALUMNO, headers=headers)
    client.post('/api/alumnos', json={**ALUMNO, 'padron': 100001}, headers=headers)
    r = client.get('/api/alumnos', headers=headers)
    assert r.status_code == 200
    assert [a['padron'] for a in r.json()] == [100000, 100001]


def test_carreras_without_alumno_is_bad_request(client, headers):
    r = client.get('/api/alumnos/carreras', headers=headers)
    assert r.status_code == 400
    assert r.json()['entityName'] == 'Alumno'
    assert r.json()['errorKey'] == 'idnoexists'


def test_cursadas_activas_without_alumno_is_bad_request(client, headers):
    r = client.get('/api/alumnos/cursadasActivas', headers=headers)
    assert r.status_code == 400
    assert r.json()['errorKey'] == 'idnoexists'


def _alumno_for(session, user):
    return repositories.AlumnoRepository(session).save(
        models.Alumno(nombre='Ada', apellido='Lovelace', padron=1, user_id=user.id))


def test_carreras_of_logged_in_alumno(client, session, make_user):
    user, h = make_user('ada', 'ROLE_ALUMNO')
    alumno = _alumno_for(session, user)
    carreras = repositories.CarreraRepository(session)
    informatica = carreras.save(models.Carrera(nombre='Informática', codigo=10))
    sistemas = carreras.save(models.Carrera(nombre='Sistemas', codigo=11))
    carreras.save(models.Carrera(nombre='Civil', codigo=1))
    inscripciones = repositories.AlumnoCarreraRepository(session)
    for carrera in (sistemas, informatica, sistemas):
        inscripciones.save(models.AlumnoCarrera(alumno_id=alumno.id, carrera_id=carrera.id))

    r = client.get('/api/alumnos/carreras', headers=h)
    assert r.status_code == 200
    assert [c['nombre'] for c in r.json()] == ['Sistemas', 'Informática']


def test_cursadas_activas_of_logged_in_alumno(client, session, make_user):
    user, h = make_user('ada', 'ROLE_ALUMNO')
    alumno = _alumno_for(session, user)
    otro = repositories.AlumnoRepository(session).save(models.Alumno(nombre='Alan', apellido='Turing', padron=2))
    curso = repositories.CursoRepository(session).save(models.Curso(docente='Wachenchauzer'))
    cursadas = repositories.CursadaRepository(session)
    activa = cursadas.save(models.Cursada(alumno_id=alumno.id, curso_id=curso.id))
    cursadas.save(models.Cursada(alumno_id=alumno.id, curso_id=curso.id, estado=models.CursadaEstado.APROBADA))
    cursadas.save(models.Cursada(alumno_id=otro.id, curso_id=curso.id))

    r = client.get('/api/alumnos/cursadasActivas', headers=h)
    assert r.status_code == 200
    assert [c['id'] for c in r.json()] == [activa.id]
    assert r.json()[0]['estado'] == 'ACTIVA'
