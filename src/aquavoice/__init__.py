# AquaVoice - Push-to-Talk Dictation

"""
Desktop push-to-talk dictation.
Records while a global hotkey is held, transcribes the clip with Google
Gemini and pastes the result at the text cursor.
"""

__version__ = "0.1.0"
__app_name__ = "AquaVoice"
