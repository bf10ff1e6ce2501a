from taskist.auth import jwt_handler


def test_health_check(client) -> None:
    response = client.get('/api/health')

    assert response.status_code == 200
    assert response.json() == {'ok': True}


def test_register_returns_token_for_new_user(client, settings) -> None:
    response = client.post('/api/auth/register', json={'email': ' A@B.com ', 'password': 'pass'})

    assert response.status_code == 201
    identity = jwt_handler.decode_access_token(response.json()['token'], settings)
    assert identity.email == 'a@b.com'


def test_register_then_login_yields_token_for_same_user(client, settings) -> None:
    registered = client.post('/api/auth/register', json={'email': 'a@b.com', 'password': 'pass'})
    logged_in = client.post('/api/auth/login', json={'email': 'A@B.COM', 'password': 'pass'})

    assert logged_in.status_code == 200
    registered_identity = jwt_handler.decode_access_token(registered.json()['token'], settings)
    login_identity = jwt_handler.decode_access_token(logged_in.json()['token'], settings)
    assert registered_identity.id == login_identity.id


def test_register_rejects_duplicate_email(client) -> None:
    client.post('/api/auth/register', json={'email': 'a@b.com', 'password': 'pass'})

    response = client.post('/api/auth/register', json={'email': 'A@b.com', 'password': 'other'})

    assert response.status_code == 409
    assert response.json() == {'error': 'Email already registered.'}


def test_register_rejects_invalid_email(client) -> None:
    response = client.post('/api/auth/register', json={'email': 'nope', 'password': 'pass'})

    assert response.status_code == 400
    assert response.json() == {'error': 'Enter a valid email.'}


def test_register_rejects_short_password(client) -> None:
    response = client.post('/api/auth/register', json={'email': 'a@b.com', 'password': 'abc'})

    assert response.status_code == 400
    assert response.json() == {'error': 'Password must be at least 4 characters.'}


def test_login_with_wrong_password_returns_generic_error(client) -> None:
    client.post('/api/auth/register', json={'email': 'a@b.com', 'password': 'pass'})

    wrong_password = client.post('/api/auth/login', json={'email': 'a@b.com', 'password': 'nope'})
    unknown_user = client.post('/api/auth/login', json={'email': 'x@b.com', 'password': 'pass'})

    assert wrong_password.status_code == 401
    assert unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json() == {'error': 'Invalid credentials.'}


def test_login_with_empty_body_is_rejected(client) -> None:
    response = client.post('/api/auth/login', json={})

    assert response.status_code == 401


def test_malformed_json_is_reported_as_bad_request(client) -> None:
    response = client.post(
        '/api/auth/register',
        content='{"email": ',
        headers={'Content-Type': 'application/json'},
    )

    assert response.status_code == 400
    assert response.json() == {'error': 'Request body must be valid JSON.'}


def test_unknown_route_uses_error_shape(client) -> None:
    response = client.get('/api/nope')

    assert response.status_code == 404
    assert response.json() == {'error': 'Not Found'}
