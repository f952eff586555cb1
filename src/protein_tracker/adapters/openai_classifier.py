"""OpenAI Responses API backend for food photo classification."""

import base64
import json
from dataclasses import dataclass

from openai import AsyncOpenAI
from pydantic import BaseModel

from protein_tracker.domain.recognition import Prediction
from protein_tracker.services.recognition import ClassifierLoader, ImageClassifier

CLASSIFIER_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "predictions": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "label": {"type": "string"},
                    "probability": {"type": "number", "minimum": 0.0, "maximum": 1.0},
                },
                "required": ["label", "probability"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["predictions"],
    "additionalProperties": False,
}

_PROMPT = (
    "Classify the food in this photo. Return up to {top_k} short, lowercase "
    "labels (comma-separate synonyms within one label), each with a "
    "probability between 0 and 1, most probable first."
)


class _ClassifierOutput(BaseModel):
    predictions: list[Prediction]


@dataclass
class OpenAIImageClassifier(ImageClassifier):
    """Image classifier backed by a vision-capable OpenAI model."""

    client: AsyncOpenAI
    model: str

    async def classify(self, image_bytes: bytes, top_k: int) -> list[Prediction]:
        """Return the model's top predictions, most probable first."""
        prompt = _PROMPT.format(top_k=top_k)
        data_url = to_data_url(image_bytes)
        response = await self.client.responses.create(
            model=self.model,
            input=[
                {
                    "role": "user",
                    "content": [
                        {"type": "input_text", "text": prompt},
                        {"type": "input_image", "image_url": data_url},
                    ],
                }
            ],
            text={
                "format": {
                    "type": "json_schema",
                    "name": "food_classification",
                    "strict": True,
                    "schema": CLASSIFIER_SCHEMA,
                }
            },
            store=False,
        )
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        output = _ClassifierOutput.model_validate(json.loads(output_text))
        ranked = sorted(output.predictions, key=lambda p: p.probability, reverse=True)
        return ranked[:top_k]


def openai_classifier_loader(api_key: str, model: str) -> ClassifierLoader:
    """Build a loader that checks the model is reachable before use."""

    async def load() -> OpenAIImageClassifier:
        client = AsyncOpenAI(api_key=api_key)
        await client.models.retrieve(model)
        return OpenAIImageClassifier(client=client, model=model)

    return load


def to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    if image_bytes[:6] in (b"GIF87a", b"GIF89a"):
        return "image/gif"
    return "image/jpeg"
