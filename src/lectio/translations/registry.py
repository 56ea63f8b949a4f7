# ABOUTME: Registry of the bundled scripture translations and where their datasets live.
# ABOUTME: Each translation has a short code, a dataset filename, and a download URL.

from dataclasses import dataclass
from pathlib import Path

DEFAULT_DATA_DIR = Path.home() / ".lectio" / "translations"

_DATASET_BASE_URL = "https://raw.githubusercontent.com/thiagobodruk/bible/master/json"


@dataclass(frozen=True)
class Translation:
    """A bundled translation dataset."""

    code: str
    title: str
    language: str
    filename: str

    @property
    def url(self) -> str:
        """Download location of the dataset JSON."""
        return f"{_DATASET_BASE_URL}/{self.filename}"


KJV = Translation(code="KJV", title="King James Version", language="en", filename="en_kjv.json")
FR_APEE = Translation(
    code="FR_APEE",
    title="Bible de l'Épée",
    language="fr",
    filename="fr_apee.json",
)

TRANSLATIONS: dict[str, Translation] = {t.code: t for t in (KJV, FR_APEE)}

DEFAULT_TRANSLATION = KJV.code


def get_translation(code: str) -> Translation:
    """Look up a registered translation by code (case-insensitive).

    Raises:
        KeyError: If the code is not registered.
    """
    try:
        return TRANSLATIONS[code.upper()]
    except KeyError:
        known = ", ".join(TRANSLATIONS)
        raise KeyError(f"Unknown translation {code!r} (known: {known})") from None
