import streamlit as st

PALETTE = {
    "negative": "#2e7d32",
    "pending": "#f9a825",
    "inconclusive": "#f9a825",
    "positive": "#c62828",
    "info": "#455a64",
}

STATUS_LABELS = {
    "negative": "Negative",
    "positive": "Positive",
    "pending": "Needs review",
    "inconclusive": "Inconclusive",
}


def status_label(status: str) -> str:
    return STATUS_LABELS.get(status, status.capitalize() if status else "—")


def color_box(text: str, level: str = "info"):
    col = PALETTE.get(level, "#455a64")
    st.markdown(
        f"""
        <div style=\"background:{col};padding:12px;border-radius:8px;color:white;font-weight:600;margin-bottom:6px;\">{text}</div>
        """,
        unsafe_allow_html=True,
    )
