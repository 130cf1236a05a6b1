import json
import logging

import httpx

from ..errors import GenerationFormatError, ValidationError
from ..models import GeneratedProduct, Seed
from .http import json_body, raise_for_status, transport_error

OPENAI_BASE = "https://api.openai.com/v1"
MODEL = "gpt-4o-mini"

log = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are an expert ecommerce product copywriter and pricing analyst."

PRODUCT_USER_PROMPT = (
    "You are an e-commerce product writer helping a Shopify brand \"{brand}\". "
    "Output a JSON object with keys:\n"
    "\"title\", \"short_description\", \"long_description\", \"price_base\" (suggested Printify base cost in USD),\n"
    "\"recommended_price\" (retail price suggested), \"tags\" (array), \"printify_base_product\" (string), "
    "\"mockup_notes\" (string), \"variant_options\" (array of variant objects like "
    "{{\"option1\": \"size\", \"values\": [\"S\",\"M\"]}}).\n\n"
    "Seed info:\n"
    "{seed}\n\n"
    "Return only valid JSON. Keep prices realistic for POD apparel in USD."
)


def _strip_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        lines = [l for l in text.splitlines() if not l.strip().startswith("```")]
        text = "\n".join(lines).strip()
    return text


def parse_generated_json(text: str | None) -> dict:
    """Read a JSON object out of a model reply.

    The whole reply is tried first; failing that, the first ``{`` that opens a
    decodable JSON object wins, so prose around the object is tolerated.
    """
    if not text or not text.strip():
        raise GenerationFormatError("OpenAI returned an empty response.")
    text = _strip_fences(text)
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        parsed = None
        decoder = json.JSONDecoder()
        start = text.find("{")
        while start != -1:
            try:
                parsed, _ = decoder.raw_decode(text, start)
                break
            except json.JSONDecodeError:
                start = text.find("{", start + 1)
        if parsed is None:
            raise GenerationFormatError("OpenAI did not return JSON.")
    if not isinstance(parsed, dict):
        raise GenerationFormatError("OpenAI returned JSON that is not an object.")
    return parsed


class ProductGenerator:
    def __init__(self, api_key: str, model: str = MODEL, base_url: str = OPENAI_BASE,
                 brand: str = "Scary Fast", timeout: float = 60):
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.brand = brand
        self.timeout = timeout
        self.headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    def _chat(self, messages) -> str:
        body = {
            "model": self.model,
            "messages": messages,
            "max_tokens": 700,
            "temperature": 0.25,
        }
        try:
            with httpx.Client(timeout=self.timeout) as client:
                r = client.post(f"{self.base_url}/chat/completions", headers=self.headers, json=body)
        except httpx.RequestError as e:
            raise transport_error(e, "OpenAI") from e
        raise_for_status(r, "OpenAI")
        data = json_body(r, "OpenAI")
        choices = data.get("choices")
        choice = choices[0] if isinstance(choices, list) and choices else None
        if not isinstance(choice, dict):
            raise GenerationFormatError("OpenAI response has no choices.")
        message = choice.get("message")
        content = message.get("content") if isinstance(message, dict) else None
        content = content or choice.get("text") or ""
        if not isinstance(content, str):
            raise GenerationFormatError("OpenAI response content is not text.")
        return content

    def generate_raw(self, seed: Seed) -> dict:
        prompt = PRODUCT_USER_PROMPT.format(
            brand=seed.brand or self.brand,
            seed=json.dumps(seed.to_prompt_dict(), ensure_ascii=False),
        )
        content = self._chat([
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ])
        return parse_generated_json(content)

    def generate(self, seed: Seed) -> GeneratedProduct:
        data = self.generate_raw(seed)
        try:
            product = GeneratedProduct.from_dict(data)
        except ValidationError as e:
            raise GenerationFormatError(f"OpenAI returned an unusable product: {e}") from e
        log.info("Generated product %r for %s", product.title, seed.product_type or "seed")
        return product
