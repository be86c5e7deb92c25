# Core module - Business logic

"""
Core functionality for the dictation app.
Contains settings, hotkey registration, audio capture, the transcription
client, paste output and the dictation pipeline.
"""
