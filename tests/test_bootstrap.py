import logging
from pathlib import Path

import pytest
from sqlalchemy import Engine

from cart import bootstrap
from cart.bootstrap import ApiMetadata, start


def test_start_with_no_arguments_runs_with_default_metadata() -> None:
    context = start([])

    assert context.settings.db_backend == "memory"
    assert context.metadata == ApiMetadata(
        title="Cart Restful Web Service",
        version="v1",
        description="Cart Restful Web Service documentation",
    )


def test_start_applies_overrides() -> None:
    context = start(["--server.port=9001", "--app.version=v2"])

    assert context.settings.port == 9001
    assert context.metadata.version == "v2"


def test_start_with_sqlite_backend() -> None:
    context = start(["--db.backend=sql", "--db.url=sqlite://"])
    try:
        assert context.app.state.engine is not None
        assert context.app.state.session_factory is not None
    finally:
        context.close()
    assert context.app.state.engine is None


@pytest.mark.parametrize(
    "args",
    [
        ["--server.port=abc"],
        ["--no.such.key=1"],
        ["--db.backend=sql"],
        ["--db.backend=sql", "--db.url=nosuchdialect://localhost/cart"],
        ["--db.backend=sql", "--db.url=postgresql://u:p@host:notaport/db"],
    ],
)
def test_start_exits_non_zero_on_misconfiguration(args: list[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        start(args)

    assert excinfo.value.code == 1


def test_start_exits_when_database_is_unreachable(
    tmp_path: Path, caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    url = f"sqlite:///{tmp_path / 'missing' / 'cart.db'}"
    disposed: list[Engine] = []
    original_dispose = Engine.dispose

    def spy_dispose(self: Engine, close: bool = True) -> None:
        disposed.append(self)
        original_dispose(self, close)

    monkeypatch.setattr(Engine, "dispose", spy_dispose)

    with caplog.at_level(logging.ERROR, logger="cart.bootstrap"):
        with pytest.raises(SystemExit) as excinfo:
            start(["--db.backend=sql", f"--db.url={url}"])

    assert excinfo.value.code == 1
    assert "Startup failed" in caplog.text
    assert len(disposed) == 1
    assert disposed[0].url.database == str(tmp_path / "missing" / "cart.db")


def test_run_serves_and_closes_context(monkeypatch: pytest.MonkeyPatch) -> None:
    served: dict = {}

    def fake_run(app, host, port, log_level):
        served.update(app=app, host=host, port=port, log_level=log_level)

    monkeypatch.setattr(bootstrap.uvicorn, "run", fake_run)

    assert bootstrap.main(["--server.host=0.0.0.0", "--server.port=8181"]) == 0
    assert served["host"] == "0.0.0.0"
    assert served["port"] == 8181
    assert served["log_level"] == "info"
    assert served["app"].title == "Cart Restful Web Service"


def test_run_does_not_serve_when_startup_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    def fail_run(*args, **kwargs):
        raise AssertionError("uvicorn must not start")

    monkeypatch.setattr(bootstrap.uvicorn, "run", fail_run)

    with pytest.raises(SystemExit) as excinfo:
        bootstrap.main(["--server.port=-1"])

    assert excinfo.value.code == 1
