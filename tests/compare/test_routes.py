"""
Tests for the HTML Compare API
==============================
Blueprint endpoints exercised through the Flask test client.
"""

import json

import pytest

from app import create_app
from config_logging import ComparisonError
from html_compare import routes as routes_module


@pytest.fixture
def client():
    """Flask test client with the comparison blueprint mounted."""
    app = create_app()
    app.config['TESTING'] = True
    with app.test_client() as test_client:
        yield test_client


class TestDiffEndpoint:
    """POST /api/compare/diff"""

    def test_diff_success(self, client):
        response = client.post('/api/compare/diff', json={
            'left': '<p>Hello world</p>',
            'right': '<p>Hello brave world</p>'
        })

        assert response.status_code == 200
        data = response.get_json()
        assert data['success'] is True
        result = data['result']
        assert result['left_diffs'] == []
        assert result['right_diffs'][0]['type'] == 'modified'
        assert 'hc-added' in result['right_diffs'][0]['content']
        assert result['summary']['changes'] > 0
        assert result['detailed'] == {'lines': [], 'tables': [], 'images': []}
        assert 'units' not in result

    def test_diff_null_documents(self, client):
        response = client.post('/api/compare/diff', json={'left': None, 'right': None})

        assert response.status_code == 200
        summary = response.get_json()['result']['summary']
        assert summary == {'additions': 0, 'deletions': 0, 'changes': 0}

    def test_diff_with_units(self, client):
        response = client.post('/api/compare/diff', json={
            'left': '', 'right': '<p>New</p>', 'include_units': True
        })

        units = response.get_json()['result']['units']
        assert [u['operation'] for u in units] == ['insert', 'insert']
        assert units[0]['highlight_kind'] == 'added'

    def test_diff_rejects_non_string(self, client):
        response = client.post('/api/compare/diff', json={'left': 42, 'right': ''})

        assert response.status_code == 400
        assert response.get_json()['error']['code'] == 'VALIDATION_ERROR'

    def test_diff_rejects_non_boolean_include_units(self, client):
        response = client.post('/api/compare/diff', json={
            'left': '', 'right': '<p>New</p>', 'include_units': 'false'
        })

        assert response.status_code == 400
        error = response.get_json()['error']
        assert error['code'] == 'VALIDATION_ERROR'
        assert 'include_units' in error['message']

    def test_diff_rejects_non_object_body(self, client):
        response = client.post('/api/compare/diff', json=['left', 'right'])

        assert response.status_code == 400
        assert response.get_json()['error']['code'] == 'VALIDATION_ERROR'

    def test_diff_invalid_json(self, client):
        response = client.post('/api/compare/diff', data='{not json',
                               content_type='application/json')

        assert response.status_code == 400
        assert response.get_json()['error']['code'] == 'INVALID_JSON'

    def test_diff_comparison_failure(self, client, monkeypatch):
        def fail(self, left, right):
            raise ComparisonError("boom")

        monkeypatch.setattr(routes_module.HtmlComparator, 'compare', fail)
        response = client.post('/api/compare/diff', json={'left': 'a', 'right': 'b'})

        assert response.status_code == 500
        error = response.get_json()['error']
        assert error['code'] == 'PROCESSING_ERROR'
        assert error['message'] == "Failed to compare documents: boom"
        assert error['correlation_id'] != 'unknown'

    def test_diff_unexpected_failure(self, client, monkeypatch):
        def fail(self, left, right):
            raise KeyError("missing")

        monkeypatch.setattr(routes_module.HtmlComparator, 'compare', fail)
        response = client.post('/api/compare/diff', json={'left': 'a', 'right': 'b'})

        assert response.status_code == 500
        assert response.get_json()['error']['code'] == 'INTERNAL_ERROR'


class TestRenderEndpoint:
    """POST /api/compare/render"""

    def test_render_joins_content(self, client):
        response = client.post('/api/compare/render', json={'diffs': [
            {'content': '<p>a</p>', 'type': 'modified'},
            {'content': '<p>b</p>', 'type': 'modified'},
        ]})

        assert response.status_code == 200
        assert response.get_json()['html'] == '<p>a</p><p>b</p>'

    def test_render_empty(self, client):
        response = client.post('/api/compare/render', json={})
        assert response.get_json()['html'] == ''

    def test_render_rejects_bad_diffs(self, client):
        response = client.post('/api/compare/render', data=json.dumps({'diffs': 'x'}),
                               content_type='application/json')
        assert response.status_code == 400


class TestHealthAndHeaders:
    """GET /api/compare/health and response headers."""

    def test_health(self, client):
        response = client.get('/api/compare/health')

        assert response.status_code == 200
        data = response.get_json()
        assert data['status'] == 'healthy'
        assert data['module'] == 'html_compare'
        assert data['parser'] in ('lxml', 'html.parser')

    def test_security_headers(self, client):
        response = client.get('/api/compare/health')

        assert response.headers['X-Content-Type-Options'] == 'nosniff'
        assert response.headers['X-Frame-Options'] == 'DENY'
