"""Pull request review combining heuristics with an AI critique."""

__version__ = "0.3.0"
