from __future__ import annotations

import json

import streamlit as st
from streamlit_local_storage import LocalStorage

from tech_tree_engine import DecodedUnlocked, TechnologyRegistry, decode_unlocked, encode_unlocked
from tech_tree_engine.unlocked_storage import STORAGE_KEY


def _get_local_storage() -> LocalStorage:
    manager = st.session_state.get("local_storage_manager")
    if manager is None:
        manager = LocalStorage()
        st.session_state.local_storage_manager = manager
    return manager


def _read_unlocked_storage() -> tuple[dict | None, str | None]:
    st.session_state.setdefault("unlocked_storage_attempts", 0)

    # Each read spawns a component iframe; give up after a few tries.
    if st.session_state.unlocked_storage_attempts > 3:
        return None, None

    st.session_state.unlocked_storage_attempts += 1
    storage = _get_local_storage()
    try:
        raw = storage.getItem(STORAGE_KEY)
    except Exception as exc:  # pragma: no cover - component failures surface as generic errors
        return None, str(exc)

    if raw is None:
        return None, None
    if isinstance(raw, dict):
        return raw, None
    if isinstance(raw, str):
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as exc:
            return None, str(exc)
        return parsed, None
    return None, f"Unexpected local storage payload type: {type(raw).__name__}"


def _write_unlocked_storage(payload: dict) -> None:
    payload_json = json.dumps(payload)
    st.components.v1.html(
        f"""
        <script>
        (() => {{
          try {{
            const payload = {payload_json};
            window.localStorage.setItem("{STORAGE_KEY}", JSON.stringify(payload));
          }} catch (err) {{
            console.warn("Failed to persist unlocked technologies to localStorage", err);
          }}
        }})();
        </script>
        """,
        height=0,
        width=0,
    )


def hydrate_unlocked_from_storage(registry: TechnologyRegistry) -> DecodedUnlocked | None:
    if st.session_state.get("unlocked_storage_hydrated"):
        return None

    payload, error = _read_unlocked_storage()
    if error:
        st.session_state.unlocked_storage_read_error = error
    if payload is None:
        st.session_state.unlocked_storage_hydrated = True
        return None

    decoded = decode_unlocked(payload, registry)
    st.session_state.unlocked_storage_hydrated = True
    if decoded is None:
        return None

    st.session_state.unlocked = set(decoded.unlocked)
    st.session_state.unlocked_storage_last = json.dumps(encode_unlocked(decoded.unlocked), sort_keys=True)
    st.session_state.unlocked_storage_dirty = False

    if decoded.dropped:
        st.session_state.unlocked_storage_dropped = decoded.dropped
    return decoded


def persist_unlocked_storage() -> None:
    if not st.session_state.get("unlocked_storage_dirty", False):
        return None

    payload = encode_unlocked(st.session_state.get("unlocked", set()))
    serialized = json.dumps(payload, sort_keys=True)
    st.session_state.unlocked_storage_dirty = False
    if st.session_state.get("unlocked_storage_last") == serialized:
        return None

    st.session_state.unlocked_storage_last = serialized
    _write_unlocked_storage(payload)
    return None
