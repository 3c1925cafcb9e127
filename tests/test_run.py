"""Tests for the uvicorn launcher."""

from unittest.mock import patch

import run


def test_main_serves_app_from_environment(monkeypatch):
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("PORT", "9001")
    monkeypatch.setenv("RELOAD", "true")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")

    with patch("run.uvicorn.run") as uvicorn_run:
        run.main()

    uvicorn_run.assert_called_once_with(
        "usermanager.api.app:app",
        host="127.0.0.1",
        port=9001,
        reload=True,
        log_level="warning",
    )


def test_app_module_is_not_a_launcher():
    import usermanager.api.app as app_module

    assert "uvicorn" not in vars(app_module)
