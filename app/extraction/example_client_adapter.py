"""Example AI client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseAIClient and register the provider in ExtractorFactory.
"""

import json

from app.extraction.client_base import BaseAIClient
from app.extraction.models import ESGExtractionResult


class ExampleClientAdapter(BaseAIClient):
    """Offline adapter: an all-null extraction result, or ``OK`` for health checks.

    No network calls. Useful for local development and tests.
    """

    HEALTH_REPLY = "OK"

    def generate(
        self,
        *,
        model: str,
        temperature: float,
        max_output_tokens: int,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object] | None = None,
        timeout_seconds: float | None = None,
    ) -> str:
        _ = model, temperature, max_output_tokens, system_prompt, user_prompt, timeout_seconds
        if json_schema is None:
            return self.HEALTH_REPLY
        return json.dumps(ESGExtractionResult().to_dict())
