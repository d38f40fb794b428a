"""Exceptions raised by sillogismi."""


class SillogismiError(Exception):
    """Base class for sillogismi errors."""


class MalformedStoreError(SillogismiError, ValueError):
    """Persisted fact-store data does not decode into a subject → attributes mapping."""


class LexiconError(SillogismiError, ValueError):
    """A lexicon file is missing a required word list or response."""
