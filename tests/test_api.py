def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    assert 'message' in res.get_json()


def test_config_route(client):
    res = client.get('/api/config')
    assert res.status_code == 200
    data = res.get_json()
    assert data['dimensions']['maxX'] == 100
    assert data['speedMultiplier'] == 1


def test_world_route_reflects_state(client, runtime):
    runtime.world.add_player()
    runtime.world.append_projectile({'owner': 0})
    data = client.get('/api/world').get_json()
    assert [p['id'] for p in data['players']] == [0]
    assert data['projectileList']['projectiles'] == [{'owner': 0, 'age': 0}]


def test_unknown_route_is_json_404(client):
    res = client.get('/nope')
    assert res.status_code == 404
    assert res.get_json() == {'error': 'not found', 'path': '/nope', 'method': 'GET'}


def test_method_not_allowed_is_json(client):
    res = client.post('/api/config')
    assert res.status_code == 405
    assert 'error' in res.get_json()
