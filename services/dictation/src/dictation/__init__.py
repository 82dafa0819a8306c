"""
Memoria Dictation Service.

Collects streaming transcript updates from a transcription provider into
a candidate text and, when listening stops, evaluates it against the
master text with the alignment engine. Exposes HTTP and WebSocket
surfaces plus health and metrics endpoints.
"""
