# biographer.py - Narrative generation through the OpenAI chat API
import logging
from collections import namedtuple

import openai
from openai import OpenAI

from config import OPENAI_CONFIG
from exceptions import UpstreamGenerationError
from prompts import SYSTEM_PROMPT, build_prompt

logger = logging.getLogger(__name__)

GenerationRequest = namedtuple("GenerationRequest", ["model", "prompt"])


class Biographer:
    """Sends a biography prompt to the model and returns the narrative text.

    One call per request; failures are reported, never retried here.
    """

    def __init__(self, client=None, model=None, config=None):
        self.config = dict(OPENAI_CONFIG, **(config or {}))
        self.model = model or self.config["model"]
        self._client = client

    @property
    def client(self):
        if self._client is None:
            if not self.config["api_key"]:
                raise UpstreamGenerationError("OPENAI_API_KEY is not configured.", model=self.model)
            self._client = OpenAI(
                api_key=self.config["api_key"],
                timeout=self.config["timeout"],
                max_retries=0
            )
        return self._client

    def build_request(self, biography, voice):
        return GenerationRequest(model=self.model, prompt=build_prompt(biography, voice))

    def generate(self, request):
        try:
            response = self.client.chat.completions.create(
                model=request.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": request.prompt}
                ],
                max_tokens=self.config["max_tokens"],
                temperature=self.config["temperature"]
            )
        except openai.OpenAIError as e:
            logger.exception("Story generation failed with model %s", request.model)
            raise UpstreamGenerationError("Failed to generate story", model=request.model, details=str(e)) from e

        text = (response.choices[0].message.content or "").strip() if response.choices else ""
        if not text:
            logger.error("Model %s returned an empty story", request.model)
            raise UpstreamGenerationError("The model returned an empty story", model=request.model)
        return text

    def write_story(self, biography, voice):
        return self.generate(self.build_request(biography, voice))
