from sqlmodel import Session, select, text
from wordguess import migrations


def test_migrations_apply_once(engine):
    first = migrations.run_migrations(engine)
    assert first == len(migrations.MIGRATIONS)
    # second run is a no-op
    assert migrations.run_migrations(engine) == 0

    with Session(engine) as s:
        names = s.exec(select(migrations.Migration.name)).all()
        assert set(names) == {name for name, _ in migrations.MIGRATIONS}
        idx = s.execute(text("SELECT name FROM sqlite_master WHERE type='index'")).all()
        assert "idx_historyentry_game_timestamp" in {row[0] for row in idx}
