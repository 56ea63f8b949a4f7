# ABOUTME: Downloads translation datasets into the local data directory.
# ABOUTME: Validates each dataset's shape before writing it, and skips files already present.

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from lectio.translations.http import HttpClient, TranslationFetchError
from lectio.translations.loader import TranslationLoadError, parse_dataset
from lectio.translations.registry import TRANSLATIONS, get_translation

logger = logging.getLogger(__name__)


@dataclass
class FetchResult:
    """Summary of a dataset download run."""

    downloaded: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    errors: list[tuple[str, str]] = field(default_factory=list)


def fetch_translations(
    data_dir: Path,
    client: HttpClient,
    *,
    codes: Sequence[str] | None = None,
    force: bool = False,
) -> FetchResult:
    """Download the datasets for the given translation codes (default: all registered).

    Existing files are left alone unless `force` is set. A download that
    fails or does not look like a dataset is recorded as an error and no
    file is written for it.
    """
    result = FetchResult()
    data_dir.mkdir(parents=True, exist_ok=True)

    for code in codes or list(TRANSLATIONS):
        translation = get_translation(code)
        target = data_dir / translation.filename
        if target.exists() and not force:
            result.skipped.append(translation.code)
            continue

        logger.info("Downloading %s from %s", translation.code, translation.url)
        try:
            raw = client.get_json(translation.url)
            books = parse_dataset(raw, code=translation.code)
        except (TranslationFetchError, TranslationLoadError) as exc:
            result.errors.append((translation.code, str(exc)))
            continue

        partial = target.with_suffix(target.suffix + ".part")
        partial.write_text(json.dumps(raw, ensure_ascii=False), encoding="utf-8")
        partial.replace(target)
        logger.info("Saved %s (%d books) to %s", translation.code, len(books), target)
        result.downloaded.append(translation.code)

    return result
