import logging
from typing import Dict, List, Optional
import requests

from errors import UpstreamError

logger = logging.getLogger(__name__)


class ChatRelay:
    """Stateless forwarder to an OpenAI-compatible chat-completions endpoint.

    The caller supplies the full conversation history on every call; the
    stored screening prompt is always sent first as the system message.
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        api_url: str,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.api_url = api_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def close(self):
        self.session.close()

    @staticmethod
    def build_messages(prompt: str, history: List[Dict]) -> List[Dict]:
        return [{"role": "system", "content": prompt}, *history]

    def respond(self, prompt: str, history: List[Dict]) -> Dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }
        payload = {
            "model": self.model,
            "messages": self.build_messages(prompt, history),
        }

        try:
            response = self.session.post(self.api_url, headers=headers, json=payload, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
            message = data["choices"][0]["message"]
            return {"role": message["role"], "content": message["content"]}
        except requests.RequestException as e:
            logger.error("Chat completion request failed: %s", e)
            raise UpstreamError() from e
        except (ValueError, KeyError, IndexError, TypeError) as e:
            # requests' JSONDecodeError is a ValueError
            logger.error("Unusable chat completion response: %r", e)
            raise UpstreamError() from e
