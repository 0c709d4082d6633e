"""Azure AI Vision multimodal embedding provider.

Calls the Image Retrieval ``vectorizeImage`` REST operation, which fetches
the image from a URL itself and returns a 1024-dimensional vector.  The
``httpx.AsyncClient`` is injected for testability and connection pooling.
"""

from __future__ import annotations

import httpx
import structlog

from prepdocs.interfaces.image_embedding_provider import IImageEmbeddingProvider
from prepdocs.utils.errors import EmbeddingError

logger = structlog.get_logger(logger_name=__name__)

_VECTORIZE_PATH = "/computervision/retrieval:vectorizeImage"
_API_VERSION = "2023-02-01-preview"
_MODEL_VERSION = "latest"


class AzureVisionImageEmbeddingProvider(IImageEmbeddingProvider):
    """Image vectorizer backed by Azure AI Vision.

    Parameters
    ----------
    http_client:
        Shared async HTTP client.
    endpoint:
        Vision resource endpoint, e.g.
        ``https://my-vision.cognitiveservices.azure.com``.
    api_key:
        Resource key sent as ``Ocp-Apim-Subscription-Key``.
    """

    def __init__(self, http_client: httpx.AsyncClient, endpoint: str, api_key: str) -> None:
        self._http = http_client
        self._endpoint = endpoint.rstrip("/")
        self._api_key = api_key

    async def vectorize_image(self, image_url: str) -> list[float]:
        url = f"{self._endpoint}{_VECTORIZE_PATH}"
        params = {"api-version": _API_VERSION, "modelVersion": _MODEL_VERSION}
        headers = {"Ocp-Apim-Subscription-Key": self._api_key}
        try:
            response = await self._http.post(
                url,
                params=params,
                headers=headers,
                json={"url": image_url},
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("vision_vectorize_failed", image_url=image_url, error=str(exc))
            raise EmbeddingError(
                message=f"Azure Vision vectorizeImage failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        vector = payload.get("vector") if isinstance(payload, dict) else None
        if not vector:
            raise EmbeddingError(
                message="Azure Vision response has no 'vector' field",
                provider_name=self.get_provider_name(),
            )
        logger.debug("vision_vectorize", image_url=image_url, dimensions=len(vector))
        return vector

    def get_provider_name(self) -> str:
        return "azure-vision"

    def is_available(self) -> bool:
        return bool(self._endpoint and self._api_key)
