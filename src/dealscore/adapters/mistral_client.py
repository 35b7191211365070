# src/dealscore/adapters/mistral_client.py
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any

import requests

from dealscore.adapters.config import AppConfig


class MistralError(RuntimeError):
    pass


@dataclass(frozen=True)
class MistralClient:
    api_key: str
    base_url: str = "https://api.mistral.ai/v1"
    model: str = "mistral-large-latest"
    temperature: float = 0.3
    timeout_s: float = 15.0
    max_retries: int = 1
    backoff_base_s: float = 0.5

    def chat_json(self, prompt: str) -> str:
        """
        Send a single user message and return the raw text content of the
        first choice. The model is asked for a JSON object response.
        """
        url = self.base_url.rstrip("/") + "/chat/completions"

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
        body: dict[str, Any] = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "response_format": {"type": "json_object"},
            "temperature": self.temperature,
        }

        last_err: Exception | None = None

        for attempt in range(self.max_retries + 1):
            try:
                resp = requests.post(url, headers=headers, json=body, timeout=self.timeout_s)
            except requests.RequestException as e:
                last_err = e
                if attempt < self.max_retries:
                    time.sleep(self.backoff_base_s * (2**attempt))
                    continue
                break

            # rate limiting / transient gateway errors
            if resp.status_code in (429, 502, 503, 504) and attempt < self.max_retries:
                wait = self.backoff_base_s * (2**attempt)
                ra = resp.headers.get("Retry-After")
                if ra:
                    try:
                        wait = max(wait, float(ra))
                    except ValueError:
                        pass
                # never wait longer than a single request may take
                if wait > self.timeout_s:
                    raise MistralError(
                        f"Mistral HTTP {resp.status_code}: Retry-After {wait:.0f}s exceeds {self.timeout_s:.0f}s budget"
                    )
                time.sleep(wait)
                continue

            if resp.status_code >= 400:
                raise MistralError(f"Mistral HTTP {resp.status_code}: {resp.text[:500]}")

            try:
                data = resp.json()
                return str(data["choices"][0]["message"]["content"])
            except (ValueError, KeyError, IndexError, TypeError) as e:
                raise MistralError(f"Unexpected Mistral response shape: {e!r}") from e

        raise MistralError(f"Mistral request failed after retries: {last_err!r}")


def make_mistral_client(cfg: AppConfig) -> MistralClient:
    if not cfg.MISTRAL_API_KEY:
        raise MistralError("Missing DEALSCORE_MISTRAL_API_KEY.")

    return MistralClient(
        api_key=cfg.MISTRAL_API_KEY,
        base_url=cfg.MISTRAL_BASE_URL,
        model=cfg.MISTRAL_MODEL,
        temperature=cfg.MISTRAL_TEMPERATURE,
        timeout_s=cfg.MISTRAL_TIMEOUT_S,
        max_retries=cfg.MISTRAL_MAX_RETRIES,
    )
