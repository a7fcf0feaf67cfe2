import streamlit as st
from core.config import load_config, configure_logging
from core.registry import load_enabled_modules
from core.pdf_parser import parse_pdf
from core.report import build_pdf

st.set_page_config(page_title="STI Results Viewer", layout="wide")
st.title("STI Results Viewer")

cfg = load_config()
configure_logging(cfg)

# 1) Parse PDF once (optional)
base = parse_pdf()

# 2) Load enabled modules
modules = load_enabled_modules(cfg)

all_rows = []
for mod in modules:
    with st.expander(mod.title, expanded=True):
        base = mod.inputs(base)
        results = mod.compute(base)
        mod.render(results)
        all_rows += mod.to_pdf(results)

# 3) Consolidated PDF
pdf_bytes = build_pdf(report=base, rows=all_rows)
st.download_button("Download PDF Summary", data=pdf_bytes, file_name="sti_summary.pdf", mime="application/pdf")

st.caption("Disclaimer: Summary of your own lab report for sharing. Not medical advice.")
