# ABOUTME: Integration tests for the reader session across process restarts.
# ABOUTME: Seeds from dataset files on disk, reopens, and checks annotations and state persist.

from pathlib import Path

from lectio.core.seeding import SeedState
from lectio.core.session import BibleSession


class TestSessionLifecycle:
    """Integration tests for opening, seeding, and reopening a database."""

    def test_seed_from_files_then_reopen(self, db_path: Path, data_dir: Path) -> None:
        # Step 1: First start seeds both translations from disk
        with BibleSession.open(db_path, data_dir) as session:
            result = session.ensure_seeded()
            assert result.state is SeedState.SEEDED
            assert result.inserted == 22
            french = session.verses.get_verses("Genesis", 1, "FR_APEE")
            assert french[2].text.endswith("la lumière fut.")

            session.annotations.add_highlight("Genesis", 1, 3, "#dcfce7")
            session.annotations.toggle_bookmark("John", 3, 1, 3)
            session.annotations.save_note("Genesis", 1, 1, "creation", 2)
            session.history.record_visit("John", 3)
            session.settings.set_preferred_translation("FR_APEE")

        # Step 2: Second start finds everything in place
        with BibleSession.open(db_path, data_dir) as session:
            result = session.ensure_seeded()
            assert result.state is SeedState.SEEDED
            assert result.inserted == 0
            assert session.annotations.get_highlights("Genesis", 1) == {3: "#dcfce7"}
            assert session.annotations.find_bookmark("John", 3, 2) is not None
            assert session.annotations.get_notes_for_chapter("Genesis", 1)[2].content == "creation"
            assert session.history.last_visit().book == "John"
            assert session.settings.preferred_translation() == "FR_APEE"

    def test_missing_dataset_leaves_database_unseeded(
        self, db_path: Path, data_dir: Path
    ) -> None:
        (data_dir / "fr_apee.json").unlink()
        with BibleSession.open(db_path, data_dir) as session:
            result = session.ensure_seeded()
            assert result.state is SeedState.UNSEEDED
            assert "FR_APEE" in result.error
            assert session.verses.count_verses() == 0

            # Annotations work without scripture text
            session.annotations.add_bookmark("Genesis", 1, 1)
            assert session.annotations.find_bookmark("Genesis", 1, 1) is not None

    def test_dataset_restored_on_next_start(self, db_path: Path, data_dir: Path) -> None:
        french = (data_dir / "fr_apee.json").read_bytes()
        (data_dir / "fr_apee.json").unlink()
        with BibleSession.open(db_path, data_dir) as session:
            session.ensure_seeded()

        (data_dir / "fr_apee.json").write_bytes(french)
        with BibleSession.open(db_path, data_dir) as session:
            result = session.ensure_seeded()
            assert result.state is SeedState.SEEDED
            assert session.verses.count_verses() == 22


class TestRepair:
    """Integration tests for the repair path."""

    def test_repair_keeps_user_data(self, db_path: Path, data_dir: Path) -> None:
        with BibleSession.open(db_path, data_dir) as session:
            session.ensure_seeded()
            session.annotations.add_highlight("Exodus", 1, 2, "#fce7f3")
            session.annotations.save_note("John", 1, 1, "logos")
            session.history.record_search("light")
            session.settings.set_preferred_translation("FR_APEE")
            session.conn.execute("DELETE FROM verses WHERE version = 'KJV'")
            session.conn.commit()

            result = session.repair()

            assert result.state is SeedState.SEEDED
            assert session.verses.count_verses("KJV") == 18
            assert session.annotations.get_highlights("Exodus", 1) == {2: "#fce7f3"}
            assert session.annotations.get_note("John", 1, 1).content == "logos"
            assert session.history.list_searches() == ["light"]
            assert session.settings.preferred_translation() == "FR_APEE"
