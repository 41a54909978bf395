from __future__ import annotations

import logging
from dataclasses import dataclass, field

import requests

from bizmetrics.config.env import ChatConfig, get_chat_config
from bizmetrics.errors import ChatUpstreamError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are an expert Data Analysis Assistant with extensive knowledge in:
- Data analysis and interpretation
- Statistical methods and metrics
- Business intelligence
- Performance indicators
- Sales data analysis
- Trend identification
- Report generation
- Data visualization

Your role is to:
1. Help users understand and analyze their data
2. Explain metrics and their significance
3. Identify trends and patterns
4. Suggest relevant visualizations
5. Provide insights and recommendations
6. Help with report interpretation
7. Answer questions about data analysis methods

Maintain a professional, knowledgeable tone while making complex information accessible. When appropriate, cite industry statistics and studies. Focus on helping users gain actionable insights from their data."""


@dataclass(frozen=True)
class ChatReply:
    response: str
    citations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"response": self.response, "citations": list(self.citations)}


class PerplexityClient:
    """Forwards one user message to the Perplexity chat-completions API."""

    def __init__(self, config: ChatConfig | None = None, session: requests.Session | None = None):
        self.config = config or get_chat_config()
        self.session = session or requests.Session()

    def build_payload(self, message: str) -> dict:
        return {
            "model": self.config.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": message},
            ],
            "include_citations": True,
            "context_level": 5,
            "include_sources": True,
        }

    def ask(self, message: str) -> ChatReply:
        if not self.config.api_key:
            raise ChatUpstreamError("PERPLEXITY_API_KEY is not set", status=401)

        url = f"{self.config.base_url.rstrip('/')}/chat/completions"
        logger.info("Forwarding chat message (%d chars) to %s", len(message), url)
        try:
            resp = self.session.post(
                url,
                json=self.build_payload(message),
                headers={
                    "accept": "application/json",
                    "content-type": "application/json",
                    "Authorization": f"Bearer {self.config.api_key}",
                },
                timeout=self.config.timeout_s,
            )
        except requests.RequestException as exc:
            raise ChatUpstreamError(f"Chat API unreachable: {exc}") from exc

        if resp.status_code >= 400:
            raise ChatUpstreamError(
                f"Chat API returned HTTP {resp.status_code}", status=resp.status_code
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise ChatUpstreamError("Invalid response format from API") from exc

        return parse_chat_response(data)


def parse_chat_response(data: dict) -> ChatReply:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        content = None
    if not content:
        logger.error("Chat API payload without message content: keys=%s", list(data or {}))
        raise ChatUpstreamError("Invalid response format from API")

    # Citations sit at the root of the payload, not on the message
    citations = [str(c) for c in (data.get("citations") or [])]
    return ChatReply(response=str(content), citations=citations)
