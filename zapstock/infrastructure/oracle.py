"""
Gemini client that turns a pasted WhatsApp order message into order hints.

The oracle is untrusted: anything it returns is only a guess that the
smart-fill service reconciles against real customers and lots. Every failure
mode (no key, network error, bad status, empty or malformed answer) comes
back as ``None``.
"""

from typing import Any, Dict, Optional
import httpx
from pydantic import ValidationError

from zapstock.core import get_logger
from zapstock.core_settings import Settings
from zapstock.application.schemas import OrderHints

logger = get_logger(__name__)

PROMPT = """Analise a seguinte mensagem de pedido via WhatsApp e extraia os dados estruturados.
A mensagem é: "{message}"

Tente identificar:
- Nome do cliente
- Endereço completo (se houver)
- Número de WhatsApp ou telefone (se houver)
- Palavras-chave do produto desejado
- Quantidade desejada (se for um número solto perto de palavras de produto, assuma que é a quantidade. Se não houver, assuma 1)
"""

RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "customerName": {"type": "STRING", "description": "Nome do cliente extraído"},
        "customerAddress": {"type": "STRING", "description": "Endereço completo de entrega"},
        "customerPhone": {"type": "STRING", "description": "Número de telefone ou whatsapp"},
        "productKeywords": {"type": "STRING", "description": "Termos chave que identificam o produto"},
        "quantity": {"type": "NUMBER", "description": "Quantidade de itens pedidos"},
    },
    "required": ["quantity"],
}

class GeminiOrderOracle:
    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gemini-2.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        return cls(
            api_key=settings.GEMINI_API_KEY,
            model=settings.GEMINI_MODEL,
            base_url=settings.GEMINI_BASE_URL,
            timeout=settings.ORACLE_TIMEOUT_SECONDS,
            transport=transport,
        )

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    @property
    def url(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def build_payload(self, message: str) -> Dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": PROMPT.format(message=message)}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": RESPONSE_SCHEMA,
            },
        }

    @staticmethod
    def response_text(data: Any) -> str:
        """Text of the first candidate part, or an empty string."""
        if not isinstance(data, dict):
            return ""
        candidates = data.get("candidates") or [{}]
        parts = (candidates[0].get("content") or {}).get("parts") or [{}]
        return parts[0].get("text") or ""

    async def extract(self, message: str) -> Optional[OrderHints]:
        if not self.configured:
            logger.warning("GEMINI_API_KEY missing; skipping message extraction")
            return None

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.url,
                    params={"key": self.api_key},
                    json=self.build_payload(message),
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Oracle request failed: {e}")
            return None
        except ValueError as e:
            logger.error(f"Oracle returned a non-JSON body: {e}")
            return None

        text = self.response_text(data)
        if not text:
            logger.warning("Oracle returned no text")
            return None
        try:
            return OrderHints.model_validate_json(text)
        except ValidationError as e:
            logger.warning(
                "Oracle answer could not be parsed",
                extra={'extra_fields': {'errors': e.error_count()}}
            )
            return None
