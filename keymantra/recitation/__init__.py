"""Reveal-on-hold flashcards."""

from keymantra.recitation.session import RecitationSession, RevealState

__all__ = ["RecitationSession", "RevealState"]
