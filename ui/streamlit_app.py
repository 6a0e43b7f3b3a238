"""Vector Search Demo - Streamlit UI.

Add documents, run cosine / Euclidean searches, and manage the store
through the HTTP API.
"""

import json
import os

import httpx
import streamlit as st

# --- Constants ---
DEFAULT_API_URL = os.environ.get("API_URL", "http://localhost:8000")
METHODS = ["cosine", "euclidean"]


def _error_detail(e: httpx.HTTPStatusError) -> str:
    try:
        detail = e.response.json().get("detail", str(e))
    except ValueError:
        detail = str(e)
    return str(detail)


# --- API Functions ---
def add_document(text: str, metadata: dict, api_url: str) -> dict:
    """POST to /api/documents. Returns {"success", "data"|"error"}."""
    url = f"{api_url.rstrip('/')}/api/documents"
    try:
        with httpx.Client(timeout=10.0) as client:
            resp = client.post(url, json={"text": text, "metadata": metadata})
        resp.raise_for_status()
        return {"success": True, "data": resp.json()}
    except httpx.ConnectError:
        return {"success": False, "error": f"Cannot connect to API at {api_url}. Is the server running?"}
    except httpx.HTTPStatusError as e:
        return {"success": False, "error": _error_detail(e)}
    except httpx.HTTPError as e:
        return {"success": False, "error": str(e)}


def search(query: str, method: str, top_k: int, threshold: float, api_url: str) -> dict:
    """POST to /api/search. Returns {"success", "data"|"error"}."""
    url = f"{api_url.rstrip('/')}/api/search"
    payload = {"query": query, "method": method, "topK": top_k, "threshold": threshold}
    try:
        with httpx.Client(timeout=10.0) as client:
            resp = client.post(url, json=payload)
        resp.raise_for_status()
        return {"success": True, "data": resp.json()}
    except httpx.ConnectError:
        return {"success": False, "error": f"Cannot connect to API at {api_url}. Is the server running?"}
    except httpx.HTTPStatusError as e:
        return {"success": False, "error": _error_detail(e)}
    except httpx.HTTPError as e:
        return {"success": False, "error": str(e)}


def get_documents(api_url: str) -> list[dict]:
    """GET /api/documents. Returns an empty list on error."""
    url = f"{api_url.rstrip('/')}/api/documents"
    try:
        with httpx.Client(timeout=10.0) as client:
            resp = client.get(url)
        resp.raise_for_status()
        return resp.json()
    except httpx.HTTPError:
        return []


def delete_document(doc_id: int, api_url: str) -> bool:
    """DELETE /api/documents/{doc_id}. Returns True on success."""
    url = f"{api_url.rstrip('/')}/api/documents/{doc_id}"
    try:
        with httpx.Client(timeout=10.0) as client:
            resp = client.delete(url)
        resp.raise_for_status()
        return True
    except httpx.HTTPError:
        return False


def reset_store(reload_demo: bool, api_url: str) -> bool:
    """POST /api/reset. Returns True on success."""
    url = f"{api_url.rstrip('/')}/api/reset"
    try:
        with httpx.Client(timeout=10.0) as client:
            resp = client.post(url, params={"reload_demo": str(reload_demo).lower()})
        resp.raise_for_status()
        return True
    except httpx.HTTPError:
        return False


def get_stats(api_url: str) -> dict | None:
    """GET /api/stats, or None when the API is unreachable."""
    url = f"{api_url.rstrip('/')}/api/stats"
    try:
        with httpx.Client(timeout=5.0) as client:
            resp = client.get(url)
        resp.raise_for_status()
        return resp.json()
    except httpx.HTTPError:
        return None


# --- UI Components ---
def display_results(results: list[dict], method: str) -> None:
    """Render ranked search hits."""
    if not results:
        st.info("No documents matched.")
        return
    for rank, hit in enumerate(results, 1):
        if method == "cosine":
            label = f"score {hit.get('score', 0.0):.4f}"
        else:
            label = f"distance {hit.get('distance', 0.0):.4f}"
        with st.expander(f"{rank}. [{label}] {hit.get('text', '')[:80]}"):
            st.text(hit.get("text", ""))
            if hit.get("metadata"):
                st.json(hit["metadata"])
            st.caption(f"id {hit.get('id')} | added {hit.get('timestamp', '')}")


def main() -> None:
    st.set_page_config(page_title="Vector Search Demo", layout="wide")

    # --- Sidebar ---
    with st.sidebar:
        st.title("Vector Search Demo")
        api_url = st.text_input("API Endpoint", value=DEFAULT_API_URL)

        stats = get_stats(api_url)
        if stats is None:
            st.error("API not reachable. Start the server first.")
        else:
            st.success("API connected")
            st.metric("Documents", stats.get("totalDocuments", 0))
            st.metric("Dimensions", stats.get("dimensions", 0))

        st.divider()
        if st.button("Reload demo documents"):
            if reset_store(True, api_url):
                st.rerun()
            st.error("Reset failed")
        if st.button("Clear store", type="secondary"):
            if reset_store(False, api_url):
                st.rerun()
            st.error("Reset failed")

    search_tab, add_tab, docs_tab = st.tabs(["Search", "Add document", "Documents"])

    with search_tab:
        query = st.text_input("Query", placeholder="fox jumping")
        col1, col2, col3 = st.columns(3)
        with col1:
            method = st.radio("Method", METHODS, horizontal=True)
        with col2:
            top_k = st.slider("Top-k", min_value=1, max_value=20, value=5)
        with col3:
            threshold = st.slider(
                "Min similarity",
                min_value=-1.0,
                max_value=1.0,
                value=0.0,
                step=0.05,
                disabled=method != "cosine",
            )
        if st.button("Search", type="primary") and query:
            result = search(query, method, top_k, threshold, api_url)
            if result["success"]:
                display_results(result["data"].get("results", []), method)
            else:
                st.error(result["error"])

    with add_tab:
        text = st.text_area("Text")
        raw_metadata = st.text_input("Metadata (JSON object)", value="{}")
        if st.button("Add", type="primary"):
            try:
                metadata = json.loads(raw_metadata or "{}")
            except json.JSONDecodeError as e:
                st.error(f"Metadata is not valid JSON: {e}")
                st.stop()
            if not isinstance(metadata, dict):
                st.error("Metadata must be a JSON object")
                st.stop()
            result = add_document(text, metadata, api_url)
            if result["success"]:
                st.success(f"Stored as document {result['data']['id']}")
                st.caption(f"Embedding: {[round(v, 3) for v in result['data']['embedding']]}")
            else:
                st.error(result["error"])

    with docs_tab:
        docs = get_documents(api_url)
        if not docs:
            st.info("No documents yet.")
        for doc in docs:
            col1, col2 = st.columns([5, 1])
            with col1:
                st.caption(f"#{doc['id']}: {doc['text']}")
            with col2:
                if st.button("Delete", key=f"del_{doc['id']}"):
                    if delete_document(doc["id"], api_url):
                        st.rerun()
                    st.error("Delete failed")


if __name__ == "__main__":
    main()
