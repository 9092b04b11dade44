from __future__ import annotations
from typing import Optional
import httpx

from gitgrab.core.config import settings

class OllamaLLM:
    def __init__(
        self,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = 120.0,
    ):
        self.model = model or settings.OLLAMA_MODEL
        self.url = f"{(base_url or settings.OLLAMA_BASE_URL).rstrip('/')}/api/generate"
        self.timeout = timeout

    def generate(self, prompt: str) -> str:
        payload = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "format": "json",
        }

        with httpx.Client(timeout=self.timeout) as client:
            r = client.post(self.url, json=payload)
            r.raise_for_status()
            data = r.json()

        return (data.get("response") or "").strip()
