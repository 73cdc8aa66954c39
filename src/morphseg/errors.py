"""Exceptions raised by the analyzer."""


class AnalyzerError(RuntimeError):
    """Base class for every error surfaced by morphseg."""


class InvalidInputError(AnalyzerError, ValueError):
    """The input text cannot be analyzed (wrong type, lone surrogates)."""


class DictionaryUnavailableError(AnalyzerError):
    """A dictionary or connection cost file is missing or corrupt."""


class NoPathError(AnalyzerError):
    """The lattice has no path from the begin anchor to the end anchor.

    The OOV fallback makes this impossible for a correctly built lattice,
    so seeing it means a defect, not bad input.
    """
