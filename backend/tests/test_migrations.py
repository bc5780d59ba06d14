from pathlib import Path

import sqlalchemy as sa
from alembic import command
from alembic.config import Config

ALEMBIC_INI = Path(__file__).resolve().parents[1] / "alembic.ini"


def alembic_config(url):
    cfg = Config(str(ALEMBIC_INI))
    cfg.set_main_option("sqlalchemy.url", url)
    return cfg


def test_upgrade_and_downgrade(tmp_path):
    url = f"sqlite:///{tmp_path / 'speedmap.db'}"
    cfg = alembic_config(url)

    command.upgrade(cfg, "head")
    engine = sa.create_engine(url)
    tables = set(sa.inspect(engine).get_table_names())
    assert {"users", "tracking_sessions", "samples", "app_settings"} <= tables

    cols = {c["name"] for c in sa.inspect(engine).get_columns("tracking_sessions")}
    assert {"sim_heading_rad", "sim_distance_m", "source"} <= cols

    command.downgrade(cfg, "base")
    tables = set(sa.inspect(engine).get_table_names())
    assert not tables & {"users", "tracking_sessions", "samples", "app_settings"}
    engine.dispose()
