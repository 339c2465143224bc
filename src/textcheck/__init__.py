"""Grammar, sentiment and aggressiveness grading of short texts through a hosted LLM."""

__version__ = "0.1.0"
