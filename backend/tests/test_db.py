import pytest
from sqlalchemy import literal_column, select, text
from sqlalchemy.dialects import postgresql
from sqlalchemy.engine import make_url
from sqlalchemy.exc import OperationalError

from app.db.database import build_engine, fetch_rows
from app.db.functions import duration_seconds
from app.models.transcription import Transcription


def test_settings_from_env(monkeypatch):
    url = "sqlite:///:memory:"
    monkeypatch.setenv("DATABASE_URL", url)

    from app import config
    from app.main import app

    assert config.settings.DATABASE_URL == url
    engine = app.state.engine
    assert engine.url == make_url(url)
    with engine.connect() as conn:
        result = conn.execute(text("SELECT 1")).scalar()
        assert result == 1


def test_pool_is_capped_for_server_databases(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'db.sqlite'}", pool_size=3)

    assert engine.pool.size() == 3
    engine.dispose()


def test_fetch_rows_returns_dicts():
    engine = build_engine("sqlite:///:memory:")

    rows = fetch_rows(engine, select(literal_column("1").label("one"), literal_column("'x'").label("letter")))

    assert rows == [{"one": 1, "letter": "x"}]


def test_fetch_rows_releases_connection_on_error(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'db.sqlite'}", pool_size=1)

    with pytest.raises(OperationalError):
        fetch_rows(engine, select(Transcription.id))

    assert engine.pool.checkedout() == 0
    # A second checkout would time out if the first connection had leaked.
    assert fetch_rows(engine, select(literal_column("2").label("two"))) == [{"two": 2}]


def test_duration_seconds_postgres_sql():
    expr = duration_seconds(Transcription.start_date, Transcription.end_date)

    sql = str(expr.compile(dialect=postgresql.dialect()))

    assert sql == "EXTRACT(EPOCH FROM (transcriptions.end_date - transcriptions.start_date))"


def test_duration_seconds_sqlite_value():
    engine = build_engine("sqlite:///:memory:")

    rows = fetch_rows(
        engine,
        select(
            duration_seconds(
                literal_column("'2024-01-01 10:00:00'"),
                literal_column("'2024-01-01 10:01:30.500000'"),
            ).label("seconds")
        ),
    )

    assert rows[0]["seconds"] == pytest.approx(90.5, abs=1e-3)


def test_created_at_default_is_timezone_aware_utc():
    default = Transcription.__table__.c.created_at.default

    value = default.arg(None)

    assert value.tzinfo is not None
    assert value.utcoffset().total_seconds() == 0
