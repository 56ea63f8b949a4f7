# ABOUTME: lectio - a local scripture reader with highlights, bookmarks, notes, and history.
# ABOUTME: Top-level package; see lectio.core.session.BibleSession for the main entry point.

__version__ = "0.1.0"
