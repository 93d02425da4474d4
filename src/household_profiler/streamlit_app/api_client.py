"""HTTP client for the FastAPI backend."""

from __future__ import annotations

import os
from typing import Any

import httpx
import streamlit as st

DEFAULT_API_URL = "http://localhost:8000"


def get_api_url() -> str:
    return st.session_state.get(
        "api_url", os.environ.get("HP_API_URL", DEFAULT_API_URL)
    )


def _client() -> httpx.Client:
    return httpx.Client(base_url=get_api_url(), timeout=30.0)


class APIError(Exception):
    def __init__(
        self,
        status_code: int,
        detail: str,
        fields: dict[str, str] | None = None,
    ) -> None:
        self.status_code = status_code
        self.detail = detail
        self.fields = fields or {}
        super().__init__(f"API Error {status_code}: {detail}")


def _handle_response(response: httpx.Response) -> Any:
    if response.status_code >= 400:
        fields: dict[str, str] = {}
        try:
            body = response.json()
            detail = body.get("error", body.get("detail", response.text))
            fields = body.get("fields") or {}
        except Exception:
            detail = response.text
        raise APIError(response.status_code, str(detail), fields)
    return response.json()


def health_check() -> dict[str, Any]:
    with _client() as client:
        r = client.get("/healthcheck")
        return _handle_response(r)


def get_household() -> dict[str, Any]:
    with _client() as client:
        r = client.get("/household")
        return _handle_response(r)


def list_members() -> list[dict[str, Any]]:
    with _client() as client:
        r = client.get("/members")
        return _handle_response(r)


def create_member(payload: dict[str, Any]) -> dict[str, Any]:
    with _client() as client:
        r = client.post("/members", json=payload)
        return _handle_response(r)


def update_member(member_id: int, payload: dict[str, Any]) -> dict[str, Any]:
    with _client() as client:
        r = client.put(f"/members/{member_id}", json=payload)
        return _handle_response(r)


def delete_member(member_id: int) -> dict[str, Any]:
    with _client() as client:
        r = client.delete(f"/members/{member_id}")
        return _handle_response(r)
