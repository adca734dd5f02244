from __future__ import annotations

import streamlit as st


def render_global_styles() -> None:
    st.markdown(
        """
        <style>
        .block-container {
            padding-top: 1rem;
            padding-bottom: 1rem;
        }

        header[data-testid="stHeader"] {
            display: none;
        }

        /* Keep the control column in view while the graph scrolls */
        [data-testid="stHorizontalBlock"] > [data-testid="stColumn"]:first-child {
            position: sticky;
            top: 1rem;
            align-self: flex-start;
            height: fit-content;
            z-index: 100;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )
