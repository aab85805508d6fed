import json
import pytest
from app import create_app, db
from models import User, Client
from models.user import UserRole

ADMIN_USERNAME = 'testuser'
ADMIN_PASSWORD = 'testpassword'
VIEWER_USERNAME = 'viewer'
VIEWER_PASSWORD = 'viewerpassword'

@pytest.fixture
def app():
    """Create and configure a Flask app backed by an in-memory database"""
    app = create_app('config.TestingConfig')

    with app.app_context():
        _init_test_data(db)

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()

@pytest.fixture
def client(app):
    """A test client for the app"""
    return app.test_client()

@pytest.fixture
def session(app):
    """The database session, for tests that drive services directly"""
    with app.app_context():
        yield db.session

def login(client, username, password):
    response = client.post('/api/auth/login', json={
        'username': username,
        'password': password
    })
    data = json.loads(response.data)
    return {'Authorization': f"Bearer {data['access_token']}"}

@pytest.fixture
def login_as(client):
    """Log in as any user and return the authorization headers"""
    return lambda username, password: login(client, username, password)

@pytest.fixture
def auth_headers(client):
    """Authentication headers for the seeded admin"""
    return login(client, ADMIN_USERNAME, ADMIN_PASSWORD)

@pytest.fixture
def viewer_headers(client):
    """Authentication headers for the seeded read-only user"""
    return login(client, VIEWER_USERNAME, VIEWER_PASSWORD)

@pytest.fixture
def make_client(client, auth_headers):
    """Create a client through the API and return its JSON"""
    def _make(**overrides):
        payload = {'name': 'Acme Corp', 'email': 'hello@acme.test', 'company_name': 'Acme'}
        payload.update(overrides)
        response = client.post('/api/clients', json=payload, headers=auth_headers)
        assert response.status_code == 201, response.data
        return json.loads(response.data)['data']
    return _make

@pytest.fixture
def make_project(client, auth_headers, make_client):
    def _make(client_id=None, **overrides):
        if client_id is None:
            client_id = make_client()['id']
        payload = {'project_name': 'Website Redesign', 'client_id': client_id}
        payload.update(overrides)
        response = client.post('/api/projects', json=payload, headers=auth_headers)
        assert response.status_code == 201, response.data
        return json.loads(response.data)['data']
    return _make

@pytest.fixture
def make_employee(client, auth_headers):
    def _make(**overrides):
        payload = {'name': 'Jane Doe', 'email': 'jane@example.com', 'department': 'Engineering'}
        payload.update(overrides)
        response = client.post('/api/employees', json=payload, headers=auth_headers)
        assert response.status_code == 201, response.data
        return json.loads(response.data)['data']
    return _make

@pytest.fixture
def make_milestone(client, auth_headers, make_project):
    def _make(project_id=None, **overrides):
        if project_id is None:
            project_id = make_project()['id']
        payload = {'milestone': 'Design approved', 'project_id': project_id}
        payload.update(overrides)
        response = client.post('/api/milestones', json=payload, headers=auth_headers)
        assert response.status_code == 201, response.data
        return json.loads(response.data)['data']
    return _make

def _init_test_data(db):
    """Seed users and one client"""
    admin = User(username=ADMIN_USERNAME, email='test@example.com', role=UserRole.ADMIN.value)
    admin.set_password(ADMIN_PASSWORD)
    db.session.add(admin)

    viewer = User(username=VIEWER_USERNAME, email='viewer@example.com', role=UserRole.VIEWER.value)
    viewer.set_password(VIEWER_PASSWORD)
    db.session.add(viewer)

    db.session.add(Client(
        name='Test Client',
        email='client@example.com',
        phone='123-456-7890',
        company_name='Test Company',
        address='123 Test Street',
        notes='Test client notes'
    ))

    db.session.commit()
