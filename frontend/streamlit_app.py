"""Minimal Streamlit client for the Pipe Flow Design API."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

import httpx
import streamlit as st

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from ingestion.table_loader import SourceError, load_uploaded_rows

DEFAULT_API_BASE = "http://localhost:8000"


def get_api_base() -> str:
    """Prefer Streamlit secrets/env var overrides for API base URL."""
    # Streamlit raises when no secrets file exists, so guard the lookup.
    secret_value: str | None = None
    try:
        secret_value = st.secrets["api_base"]
    except Exception:  # noqa: BLE001 - secrets module raises custom errors
        secret_value = None

    env_value = os.environ.get("API_BASE_URL")
    return secret_value or env_value or DEFAULT_API_BASE


def compute_flow_design(rows: list[list[str]]) -> dict[str, Any]:
    """Send raw rows to the backend and return the JSON report."""
    response = _post_api("/flow-design", {"rows": rows})
    return response.json()


def download_report(rows: list[list[str]]) -> bytes:
    return _post_api("/flow-design/report.xlsx", {"rows": rows}).content


@st.cache_data(ttl=600)
def load_media() -> list[dict[str, Any]]:
    """Load and cache the reference media table."""
    base_url = get_api_base().rstrip("/")
    with httpx.Client(timeout=30, follow_redirects=True) as client:
        response = client.get(f"{base_url}/media/")
        response.raise_for_status()
        return response.json()


def _post_api(path: str, payload: dict[str, Any]) -> httpx.Response:
    base_url = get_api_base().rstrip("/")
    url = f"{base_url}{path}"
    with httpx.Client(timeout=30, follow_redirects=True) as client:
        response = client.post(url, json=payload)
        response.raise_for_status()
        return response


def main() -> None:
    st.set_page_config(page_title="Pipe Flow Design", layout="wide")
    st.title("管道流量设计")
    st.caption("Upload a table of pipe diameter (mm), medium and remark")

    with st.sidebar:
        st.header("Reference media")
        try:
            st.dataframe(load_media(), use_container_width=True)
        except httpx.HTTPError as exc:
            st.warning(f"Could not load media table: {exc}")

    uploaded = st.file_uploader("Input table", type=["xlsx", "csv"])
    if uploaded is None:
        st.info("Choose an .xlsx or .csv file to start.")
        return

    try:
        rows = load_uploaded_rows(uploaded.name, uploaded.getvalue())
    except SourceError as exc:
        st.error(str(exc))
        return

    with st.spinner("Computing flow rates..."):
        try:
            report = compute_flow_design(rows)
            workbook = download_report(rows)
        except httpx.HTTPError as exc:
            st.error(f"Request failed: {exc}")
            return

    meta = report.get("meta", {})
    st.subheader("Results")
    st.write(
        f"Rows: {meta.get('total_rows', 0)} | processed: {meta.get('processed', 0)} | "
        f"skipped: {meta.get('skipped', 0)}"
    )
    if report.get("data"):
        st.dataframe(report["data"], use_container_width=True)
    else:
        st.info("No valid rows found.")

    if report.get("skipped_rows"):
        with st.expander("Skipped rows"):
            st.dataframe(report["skipped_rows"], use_container_width=True)

    st.download_button(
        "Download report (.xlsx)",
        data=workbook,
        file_name="流量设计结果.xlsx",
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )


if __name__ == "__main__":
    main()
