import pytest
import json

@pytest.fixture
def log_payload(make_client):
    def _payload(**overrides):
        payload = {
            'client_id': make_client()['id'],
            'date': '2030-05-01',
            'mode': 'call',
            'summary': 'Discussed the next release scope'
        }
        payload.update(overrides)
        return payload
    return _payload

def test_create_communication(client, auth_headers, log_payload):
    response = client.post('/api/communications', json=log_payload(project_id=''), headers=auth_headers)

    assert response.status_code == 201
    data = json.loads(response.data)['data']
    assert data['mode'] == 'call'
    assert data['follow_up_required'] is False
    assert data['project_id'] is None

def test_short_summary_is_rejected_and_not_stored(client, auth_headers, log_payload):
    response = client.post('/api/communications', json=log_payload(summary='Hello'), headers=auth_headers)

    assert response.status_code == 400
    assert json.loads(response.data)['error']['message'] == 'Summary must be at least 10 characters'

    response = client.get('/api/communications', headers=auth_headers)
    assert json.loads(response.data)['data']['total'] == 0

@pytest.mark.parametrize('overrides, message', [
    ({'date': ''}, 'Date is required'),
    ({'mode': 'fax'}, 'Please select a valid communication mode'),
    ({'summary': ''}, 'Summary is required'),
    ({'client_id': ''}, 'Client is required'),
])
def test_communication_validation(client, auth_headers, log_payload, overrides, message):
    response = client.post('/api/communications', json=log_payload(**overrides), headers=auth_headers)

    assert response.status_code == 400
    assert json.loads(response.data)['error']['message'] == message

def test_communication_for_missing_project(client, auth_headers, log_payload):
    response = client.post('/api/communications', json=log_payload(project_id='ghost'), headers=auth_headers)

    assert response.status_code == 400
    assert json.loads(response.data)['error']['message'] == 'Referenced project does not exist'

def test_filter_by_follow_up(client, auth_headers, log_payload):
    client.post('/api/communications', json=log_payload(follow_up_required=True), headers=auth_headers)
    client.post('/api/communications', json=log_payload(mode='email'), headers=auth_headers)

    response = client.get('/api/communications?followUpRequired=true', headers=auth_headers)
    data = json.loads(response.data)['data']
    assert data['total'] == 1
    assert data['items'][0]['follow_up_required'] is True

    response = client.get('/api/communications?mode=email', headers=auth_headers)
    assert json.loads(response.data)['data']['total'] == 1

    response = client.get('/api/communications?followUpRequired=maybe', headers=auth_headers)
    assert response.status_code == 400
    assert json.loads(response.data)['error']['message'] == 'Invalid followUpRequired filter: maybe'

def test_communications_sorted_by_date(client, auth_headers, log_payload):
    for day in ('2030-05-03', '2030-05-01', '2030-05-02'):
        client.post('/api/communications', json=log_payload(date=day), headers=auth_headers)

    response = client.get('/api/communications', headers=auth_headers)

    dates = [c['date'] for c in json.loads(response.data)['data']['items']]
    assert dates == ['2030-05-03', '2030-05-02', '2030-05-01']

def test_communication_detail_names(client, auth_headers, make_project):
    project = make_project(project_name='Mobile App')
    response = client.post('/api/communications', json={
        'client_id': project['client_id'],
        'project_id': project['id'],
        'date': '2030-05-01',
        'mode': 'meeting',
        'summary': 'Walked through the prototype'
    }, headers=auth_headers)
    log = json.loads(response.data)['data']

    response = client.get(f"/api/communications/{log['id']}", headers=auth_headers)

    data = json.loads(response.data)['data']
    assert data['client_name'] == 'Acme Corp'
    assert data['project_name'] == 'Mobile App'

def test_delete_communication(client, auth_headers, log_payload):
    response = client.post('/api/communications', json=log_payload(), headers=auth_headers)
    log = json.loads(response.data)['data']

    response = client.delete(f"/api/communications/{log['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert json.loads(response.data)['data']['message'] == 'Communication log deleted'

    response = client.get(f"/api/communications/{log['id']}", headers=auth_headers)
    assert response.status_code == 404
    assert json.loads(response.data)['error']['message'] == 'Communication log not found'
