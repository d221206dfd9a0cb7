"""
Unit Tests for HTTP middleware helpers
"""
import pytest

from ministry_hub.core.middleware import should_skip_logging


class TestShouldSkipLogging:

    @pytest.mark.parametrize('path', ['/health', '/docs', '/api/v1/health/ready', '/static/logo.svg', '/app.js'])
    def test_quiet_paths(self, path):
        assert should_skip_logging(path) is True

    @pytest.mark.parametrize('path', ['/api/v1/library', '/api/v1/admin/leads', '/api/v1/giving/webhook'])
    def test_api_paths_are_logged(self, path):
        assert should_skip_logging(path) is False
