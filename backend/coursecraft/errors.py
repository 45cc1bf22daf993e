from __future__ import annotations


class EngineError(Exception):
	"""Base class for errors raised by the strategy engine."""


class MalformedInputError(EngineError):
	# Only raised when there is nothing at all to work from; partial input is
	# defaulted field by field.
	pass


class ExternalServiceError(EngineError):
	"""The narrative generator failed or is not configured.

	Always recoverable: callers route to the local synthesizer.
	"""

	def __init__(self, message: str, *, service: str = "gemini") -> None:
		super().__init__(message)
		self.service = service
