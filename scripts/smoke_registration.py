"""
Teste rápido do cadastro de voluntários contra um servidor rodando.

Uso:
    BASE_URL=http://localhost:8000 python scripts/smoke_registration.py

Atenção: o script apaga todos os cadastros antes de começar.
"""

import os

import requests

BASE_URL = os.environ.get("BASE_URL", "http://localhost:8000")


def show(label: str, resp: requests.Response) -> None:
    print(f"### {label}")
    print(f"Status: {resp.status_code} | Body: {resp.text}\n")


def main() -> None:
    show("Limpar tudo (204 esperado)", requests.delete(f"{BASE_URL}/volunteers", timeout=5))

    show("Busca de CEP", requests.get(f"{BASE_URL}/address/01001-000", timeout=10))

    payload = {"name": "Ana", "email": "ana@x.com", "postal_code": "01001-000", "address": ""}
    show("Cadastro (201 esperado)", requests.post(f"{BASE_URL}/volunteers", json=payload, timeout=10))

    payload["name"] = "Outra Ana"
    show("E-mail repetido (409 esperado)", requests.post(f"{BASE_URL}/volunteers", json=payload, timeout=10))

    show("Filtro 'sé'", requests.get(f"{BASE_URL}/volunteers", params={"query": "sé"}, timeout=5))


if __name__ == "__main__":
    main()
