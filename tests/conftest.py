# ABOUTME: Shared pytest fixtures for lectio tests.
# ABOUTME: Provides small KJV and French datasets, dataset files on disk, and open sessions.

import json
import sqlite3
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from lectio.core.session import BibleSession
from lectio.db.connection import open_bible
from lectio.translations.loader import MemoryTranslations

# 18 verses: Genesis 7+3, Exodus 2, John 2+1+3
KJV_DATASET: list[dict[str, Any]] = [
    {
        "abbrev": "gn",
        "name": "Genesis",
        "chapters": [
            [
                "In the beginning God created the heaven and the earth.",
                "And the earth was without form, and void; and darkness {was} upon the face "
                "of the deep.",
                "And God said, Let there be light: and there was light.",
                "And God saw the light, that {it was} good.",
                "And God called the light Day.",
                "And God said, Let there be a firmament in the midst of the waters.",
                "And God made the firmament.",
            ],
            [
                "Thus the heavens and the earth were finished.",
                "And on the seventh day God ended his work.",
                "And God blessed the seventh day.",
            ],
        ],
    },
    {
        "abbrev": "ex",
        "name": "Exodus",
        "chapters": [
            [
                "Now these {are} the names of the children of Israel.",
                "Reuben, Simeon, Levi, and Judah.",
            ],
        ],
    },
    {
        "abbrev": "jo",
        "name": "John",
        "chapters": [
            [
                "In the beginning was the Word.",
                "The same was in the beginning with God.",
            ],
            ["And the third day there was a marriage in Cana of Galilee."],
            [
                "There was a man of the Pharisees, named Nicodemus.",
                "The same came to Jesus by night.",
                "Jesus answered and said unto him.",
            ],
        ],
    },
]

# 4 verses, French book names
FR_DATASET: list[dict[str, Any]] = [
    {
        "abbrev": "gn",
        "name": "Genèse",
        "chapters": [
            [
                "Au commencement, Dieu créa les cieux et la terre.",
                "La terre était informe et vide.",
                "Dieu dit: Que la lumière soit! Et la lumière fut.",
            ],
        ],
    },
    {
        "abbrev": "jo",
        "name": "Jean",
        "chapters": [["Au commencement était la Parole."]],
    },
]

KJV_VERSES = 18
FR_VERSES = 4
TOTAL_VERSES = KJV_VERSES + FR_VERSES


@pytest.fixture
def datasets() -> dict[str, Any]:
    """Both test datasets keyed by translation code, primary (KJV) first."""
    return {"KJV": KJV_DATASET, "FR_APEE": FR_DATASET}


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """A data directory holding both dataset files; the French one starts with a BOM."""
    directory = tmp_path / "translations"
    directory.mkdir()
    (directory / "en_kjv.json").write_text(json.dumps(KJV_DATASET), encoding="utf-8")
    (directory / "fr_apee.json").write_text(
        "\ufeff" + json.dumps(FR_DATASET, ensure_ascii=False), encoding="utf-8"
    )
    return directory


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path for a temporary reader database."""
    return tmp_path / "bible.db"


@pytest.fixture
def conn(db_path: Path) -> Iterator[sqlite3.Connection]:
    """An open database with the schema applied but no verses."""
    connection = open_bible(db_path)
    yield connection
    connection.close()


@pytest.fixture
def session(db_path: Path, datasets: dict[str, Any]) -> Iterator[BibleSession]:
    """An unseeded session over the in-memory datasets."""
    bible = BibleSession.open(db_path, source=MemoryTranslations(datasets))
    yield bible
    bible.close()


@pytest.fixture
def seeded_session(session: BibleSession) -> BibleSession:
    """A session whose verses table holds both test translations."""
    session.ensure_seeded()
    return session
