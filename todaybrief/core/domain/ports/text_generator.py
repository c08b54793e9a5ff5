"""Text generation port.

Application services depend on this protocol only; the Gemini adapter lives in
infrastructure and is injected at startup.
"""

from typing import Protocol


class TextGenerator(Protocol):
    """Submit a prompt, receive a plain-text completion.

    Implementations raise ``GenerationFailedError`` for every failure mode
    (network error, non-2xx response, malformed payload) and never retry.
    """

    async def generate(self, prompt: str) -> str: ...
