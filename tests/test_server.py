"""
Tests for the HTTP API.

Run with: pytest tests/test_server.py
"""

import pytest

from workshop_scheduler.server import create_app


@pytest.fixture
def client():
    app = create_app({'TESTING': True})
    return app.test_client()


JOBS = [
    {"name": "A", "duration": 5, "priority": 1, "deadline": 10},
    {"name": "B", "duration": 3, "priority": 2, "deadline": 4},
    ["C", "8", "3", "20"],
]


class TestHealth:
    """Test service metadata endpoints."""

    def test_health(self, client):
        resp = client.get('/health')

        assert resp.status_code == 200
        assert resp.get_json()['status'] == 'healthy'

    def test_policies(self, client):
        data = client.get('/policies').get_json()

        assert [p['value'] for p in data['policies']] == [
            'by_priority',
            'shortest_job_first',
            'earliest_deadline_first',
            'first_come_first_served',
        ]
        assert data['default'] == 'by_priority'
        assert data['default_machine_count'] == 1

    def test_not_found(self, client):
        resp = client.get('/nope')

        assert resp.status_code == 404
        assert resp.get_json() == {'error': 'Not found'}


class TestScheduleEndpoint:
    """Test POST /schedule."""

    def test_schedule(self, client):
        resp = client.post('/schedule', json={
            'jobs': JOBS,
            'policy': 'shortest_job_first',
            'machine_count': 1
        })

        assert resp.status_code == 200
        data = resp.get_json()
        assert data['type'] == 'schedule_response'
        assert data['policy'] == 'shortest_job_first'
        assert [(s['job_id'], s['start_time'], s['end_time']) for s in data['schedule']] == [
            (1, 0, 3), (0, 3, 8), (2, 8, 16)
        ]
        assert data['metrics']['makespan'] == 16

    def test_defaults(self, client):
        """Default policy is by priority on one machine."""
        data = client.post('/schedule', json={'jobs': JOBS}).get_json()

        assert data['machine_count'] == 1
        assert [s['name'] for s in data['schedule']] == ['C', 'B', 'A']

    def test_two_machines(self, client):
        data = client.post('/schedule', json={
            'jobs': JOBS,
            'policy': 'fcfs',
            'machine_count': 2
        }).get_json()

        assert [(s['job_id'], s['start_time'], s['end_time'], s['machine_id'])
                for s in data['schedule']] == [(0, 0, 5, 0), (1, 0, 3, 1), (2, 3, 11, 1)]

    def test_reports_late_jobs(self, client):
        data = client.post('/schedule', json={
            'jobs': JOBS,
            'policy': 'by_priority'
        }).get_json()

        # C 0-8, B 8-11 (deadline 4), A 11-16 (deadline 10)
        assert [s['late'] for s in data['schedule']] == [False, True, True]
        assert data['metrics']['late_jobs'] == 2

    def test_invalid_row(self, client):
        resp = client.post('/schedule', json={
            'jobs': [JOBS[0], {"name": "B", "duration": "abc", "priority": 1, "deadline": 1}]
        })

        assert resp.status_code == 400
        data = resp.get_json()
        assert data['row'] == 2
        assert 'duration' in data['error']

    @pytest.mark.parametrize("row", [5, None])
    def test_row_of_wrong_type(self, client, row):
        resp = client.post('/schedule', json={'jobs': [row]})

        assert resp.status_code == 400
        assert resp.get_json()['row'] == 1

    def test_negative_duration(self, client):
        resp = client.post('/schedule', json={'jobs': [["A", "-1", "1", "1"]]})

        assert resp.status_code == 400
        assert resp.get_json()['row'] == 1

    @pytest.mark.parametrize("machine_count", [0, -2, "two", 1.5])
    def test_invalid_machine_count(self, client, machine_count):
        resp = client.post('/schedule', json={'jobs': JOBS, 'machine_count': machine_count})

        assert resp.status_code == 400
        assert resp.get_json()['row'] is None

    def test_unknown_policy(self, client):
        resp = client.post('/schedule', json={'jobs': JOBS, 'policy': 'random'})

        assert resp.status_code == 400
        assert 'Unknown policy' in resp.get_json()['error']

    def test_empty_body(self, client):
        resp = client.post('/schedule', data='')

        assert resp.status_code == 400

    def test_jobs_must_be_list(self, client):
        resp = client.post('/schedule', json={'jobs': 'A;1;1;1'})

        assert resp.status_code == 400

    def test_empty_jobs(self, client):
        data = client.post('/schedule', json={'jobs': []}).get_json()

        assert data['schedule'] == []
        assert data['metrics']['makespan'] == 0


class TestLimits:
    """Test configured request limits."""

    def test_max_jobs(self):
        app = create_app({'TESTING': True, 'MAX_JOBS': 2})

        resp = app.test_client().post('/schedule', json={'jobs': JOBS})

        assert resp.status_code == 400
        assert 'too many jobs' in resp.get_json()['error']

    def test_max_machines(self):
        app = create_app({'TESTING': True, 'MAX_MACHINE_COUNT': 4})

        resp = app.test_client().post('/schedule', json={'jobs': JOBS, 'machine_count': 5})

        assert resp.status_code == 400

    def test_configured_defaults(self):
        app = create_app({
            'TESTING': True,
            'DEFAULT_POLICY': 'edf',
            'DEFAULT_MACHINE_COUNT': 3
        })

        data = app.test_client().post('/schedule', json={'jobs': JOBS}).get_json()

        assert data['policy'] == 'earliest_deadline_first'
        assert data['machine_count'] == 3

    def test_env_config(self, monkeypatch):
        monkeypatch.setenv('WORKSHOP_SCHEDULER_DEFAULT_MACHINE_COUNT', '2')

        app = create_app({'TESTING': True})

        assert app.config['DEFAULT_MACHINE_COUNT'] == 2

    @pytest.mark.parametrize("config", [
        {'DEFAULT_POLICY': 'random'},
        {'DEFAULT_MACHINE_COUNT': 0},
    ])
    def test_invalid_defaults(self, config):
        with pytest.raises(ValueError):
            create_app(config)


class TestImportEndpoint:
    """Test POST /import."""

    def test_import_text(self, client):
        resp = client.post(
            '/import?policy=sjf&machines=2',
            data='A;5;1;10\n\nbad\nB;3;2;4\nC;8;3;20\n',
            content_type='text/plain'
        )

        assert resp.status_code == 200
        data = resp.get_json()
        assert data['machine_count'] == 2
        assert [(s['name'], s['machine_id']) for s in data['schedule']] == [
            ('B', 0), ('A', 1), ('C', 0)
        ]

    def test_import_bad_row(self, client):
        resp = client.post('/import', data='A;5;1;10\nB;x;2;4\n', content_type='text/plain')

        assert resp.status_code == 400
        assert resp.get_json()['row'] == 2

    def test_import_bad_machines(self, client):
        resp = client.post('/import?machines=-1', data='A;5;1;10\n', content_type='text/plain')

        assert resp.status_code == 400
