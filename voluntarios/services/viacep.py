import requests
from typing import Any, Callable, Dict, Optional

from ..core.config import settings
from ..core.logging import logger

Fetcher = Callable[[str], Optional[Dict[str, Any]]]


def format_address(data: Dict[str, Any]) -> str:
    """Build "street, neighborhood, city - state" skipping blank fields."""
    def field(name: str) -> str:
        return str(data.get(name) or "").strip()

    place = ", ".join(
        part for part in (field("logradouro"), field("bairro"), field("localidade")) if part
    )
    state = field("uf")
    if place and state:
        return f"{place} - {state}"
    return (place or state).strip()


class ViaCepService:
    def __init__(self):
        self.base_url = settings.viacep_base_url.rstrip("/")
        self.timeout = settings.viacep_timeout_seconds
        self._fetcher_override: Optional[Fetcher] = None

    def set_fetcher_override(self, fetcher: Optional[Fetcher]) -> Optional[Fetcher]:
        """Temporarily replace the HTTP lookup (useful for captures/tests)."""
        previous = self._fetcher_override
        self._fetcher_override = fetcher
        return previous

    def fetch(self, cep: str) -> Optional[Dict[str, Any]]:
        """Raw ViaCEP payload for an 8-digit CEP, or None when the call fails."""
        if self._fetcher_override:
            try:
                return self._fetcher_override(cep)
            except Exception as exc:
                logger.error(f"Fetcher override failed for CEP {cep}: {exc}")
                return None

        url = f"{self.base_url}/{cep}/json/"

        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"Erro ao buscar endereço para CEP {cep}: {e}")
            return None
        except ValueError as e:
            logger.error(f"ViaCEP returned invalid JSON for CEP {cep}: {e}")
            return None

        if not isinstance(data, dict):
            logger.error(f"ViaCEP returned unexpected payload for CEP {cep}: {data!r}")
            return None
        return data

    def resolve_address(self, cep: str) -> Optional[str]:
        """Formatted address for a CEP, or None when not found or unreachable."""
        data = self.fetch(cep)
        if data is None:
            return None

        # ViaCEP answers 200 with {"erro": true} (or "true") for unknown CEPs
        if data.get("erro"):
            logger.error(f"CEP não encontrado: {cep}")
            return None

        address = format_address(data)
        if not address:
            logger.error(f"CEP {cep} resolved to an empty address")
            return None

        logger.info(f"[viacep] CEP {cep} -> {address}")
        return address


# Global instance
viacep_service = ViaCepService()
