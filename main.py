from __future__ import annotations

import streamlit as st


def main():
    """Redirect to the explorer as the default landing page."""
    st.switch_page("pages/Explorer.py")


if __name__ == "__main__":
    main()
