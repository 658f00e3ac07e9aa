from __future__ import annotations

import io

from anyio import to_thread
from huggingface_hub import InferenceClient

IMAGE_MODEL = "black-forest-labs/FLUX.1-schnell"
INFERENCE_STEPS = 5


class ImageClient:
    """
    Thin wrapper around the Hugging Face inference SDK for text-to-image.

    The SDK is synchronous, so each call runs in a worker thread and the
    event loop only waits on its completion.
    """

    def __init__(self, token: str) -> None:
        self._client = InferenceClient(provider="auto", api_key=token)

    def _generate_sync(self, prompt: str) -> bytes:
        image = self._client.text_to_image(
            prompt,
            model=IMAGE_MODEL,
            num_inference_steps=INFERENCE_STEPS,
        )
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()

    async def generate_png(self, prompt: str) -> bytes:
        """Generate an image for `prompt` and return it PNG-encoded."""
        return await to_thread.run_sync(self._generate_sync, prompt)
