# ABOUTME: Reader workflows built on the db layer: seeding, sessions, and search.
# ABOUTME: Exports the session object and seeding types used by the CLI.

from lectio.core.seeding import SeedingController, SeedResult, SeedState, force_reset
from lectio.core.session import BibleSession

__all__ = [
    "BibleSession",
    "SeedResult",
    "SeedState",
    "SeedingController",
    "force_reset",
]
