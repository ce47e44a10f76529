"""Tests for migration discovery in the migration runner."""

import run_migrations


class TestDiscoverMigrations:
    def test_sorted_with_checksums(self, tmp_path, monkeypatch):
        (tmp_path / "002_second.sql").write_text("SELECT 2;")
        (tmp_path / "001_first.sql").write_text("SELECT 1;")
        (tmp_path / "notes.txt").write_text("ignored")
        monkeypatch.setattr(run_migrations, "MIGRATIONS_DIR", tmp_path)

        migrations = run_migrations.discover_migrations()

        assert [name for name, _, _ in migrations] == ["001_first.sql", "002_second.sql"]
        assert all(len(checksum) == 16 for _, _, checksum in migrations)

    def test_checksum_changes_with_content(self, tmp_path):
        sql_file = tmp_path / "001.sql"
        sql_file.write_text("SELECT 1;")
        before = run_migrations.checksum_of(sql_file)
        sql_file.write_text("SELECT 2;")
        assert run_migrations.checksum_of(sql_file) != before

    def test_missing_directory(self, tmp_path, monkeypatch):
        monkeypatch.setattr(run_migrations, "MIGRATIONS_DIR", tmp_path / "missing")
        assert run_migrations.discover_migrations() == []

    def test_shipped_migrations(self):
        names = [name for name, _, _ in run_migrations.discover_migrations()]
        assert names == [
            "001_profiles.sql",
            "002_bible_study_groups.sql",
            "003_group_membership_functions.sql",
        ]
