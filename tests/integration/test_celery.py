"""Testes de integração para configuração do Celery."""

import pytest

pytestmark = pytest.mark.integration


class TestCeleryConfig:
    """Verifica que o Celery carrega corretamente via Django."""

    def test_celery_app_exported_from_init(self):
        from config import celery_app
        from config.celery import app

        assert celery_app is app
        assert app.main == "marketplace"

    def test_tests_run_tasks_in_process(self):
        from config.celery import app

        assert app.conf.task_always_eager is True
        assert app.conf.broker_url == "memory://"

    def test_celery_serializer_is_json(self, settings):
        assert settings.CELERY_TASK_SERIALIZER == "json"
        assert settings.CELERY_RESULT_SERIALIZER == "json"
        assert settings.CELERY_ACCEPT_CONTENT == ["json"]

    def test_celery_timezone_matches_django(self, settings):
        assert settings.CELERY_TIMEZONE == settings.TIME_ZONE

    def test_outbox_sweep_is_scheduled(self, settings):
        entry = settings.CELERY_BEAT_SCHEDULE["relay-outbox-events"]
        assert entry["task"] == "core.relay_outbox_events"
        assert entry["schedule"] > 0

    def test_tasks_are_registered(self):
        from config.celery import app

        app.loader.import_default_modules()
        for name in (
            "core.debug_task",
            "core.relay_outbox_events",
            "notifications.send_reservation_email",
            "notifications.send_review_request_email",
        ):
            assert name in app.tasks


class TestDebugTask:
    """Verifica execução da task de diagnóstico em modo eager."""

    def test_debug_task_returns_success(self):
        from modules.core.tasks import debug_task

        result = debug_task.delay()

        assert result.successful()
        assert result.result == {"status": "ok", "message": "Celery is working"}
