"""
AutoVoice - Voice-Driven Car Sales Assistant
============================================
A voice-first backend that lets customers talk to a sales assistant
about the cars currently on the lot.

Features:
- Speech-to-text for recorded customer questions
- Inventory-grounded replies from a hosted language model
- Spoken replies via text-to-speech
- Browsable and searchable car inventory

Tech Stack:
- FastAPI (async backend)
- OpenAI Whisper (STT)
- OpenAI Chat Completions (LLM)
- OpenAI TTS (speech)
"""

__version__ = "1.0.0"
__author__ = "AutoVoice Team"
