import logging
import streamlit as st
from ui import compensation, equity, compare
from ui.utils import init_session_state

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

st.set_page_config(page_title="Tech Compensation Calculator", layout="wide")
st.title("Tech Compensation Calculator")
st.caption("Project and compare total compensation packages including salary growth, bonuses and equity")

# --- SESSION STATE INITIALIZATION ---
init_session_state()

# --- SHARED TAX RATES ---
# Rendered once, ahead of the tabs, so every equity chart reads the edited rates
with st.sidebar:
    equity.render_tax_rates()

# --- MAIN TABS ---
tab_current, tab_new, tab_compare = st.tabs(["Current Package", "New Package", "Comparison"])

with tab_current:
    compensation.render_compensation("current_package", "Current Package")
    equity.render_equity("current_package")

with tab_new:
    compensation.render_compensation("new_package", "New Package")
    equity.render_equity("new_package")

with tab_compare:
    compare.render_comparison()
