"""Transtudio - streaming multi-provider document translation.

This package lets a plain-text document be uploaded, priced against several LLM
providers, and translated back as an incremental stream with usage telemetry.
"""

__version__ = "0.1.0"
__license__ = "MIT"
