"""
Tests for engine construction and table creation.
"""

import pytest
from sqlalchemy import inspect

from disruption_tracker.database import build_engine, init_db


@pytest.mark.parametrize("database_url", ["", "   ", None])
def test_blank_url_fails_fast(database_url):
    with pytest.raises(RuntimeError, match="DATABASE_URL"):
        build_engine(database_url)


def test_sqlite_file_is_created(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'nested' / 'tracker.db'}")
    try:
        init_db(engine)
        tables = set(inspect(engine).get_table_names())
    finally:
        engine.dispose()

    assert {'feed_items', 'trending_companies', 'fetch_logs', 'ai_funding_rounds'} <= tables
    assert (tmp_path / 'nested' / 'tracker.db').exists()
