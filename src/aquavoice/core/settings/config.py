"""
Centralized application configuration.

Edit the variables below to configure development settings.
"""

import logging

# =============================================================================
# DEVELOPMENT SETTINGS - Edit these for local development
# =============================================================================
LOG_LEVEL = "DEBUG"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
LOG_TO_CONSOLE = True  # Set to True to output logs to terminal
# =============================================================================

# =============================================================================
# PIPELINE TIMINGS
# =============================================================================
SUCCESS_RESET_MS = 3000  # How long "success" stays up before returning to idle
ERROR_RESET_MS = 2500  # How long an error stays up before returning to idle
PASTE_DELAY_SECONDS = 0.1  # Pause between clipboard write and paste keystroke
# =============================================================================

# =============================================================================
# AUDIO / TRANSCRIPTION
# =============================================================================
SAMPLE_RATE = 16000
CHANNELS = 1
DEFAULT_MODEL = "gemini-3-flash-preview"
PREVIEW_LENGTH = 40  # Characters of transcribed text shown in the status line
# =============================================================================


def get_log_level() -> int:
    """Get the logging level as an integer."""
    return getattr(logging, LOG_LEVEL.upper(), logging.INFO)
