"""TypeTutor: adaptive typing practice for programmers."""

__version__ = "0.1.0"
