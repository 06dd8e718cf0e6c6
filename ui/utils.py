import streamlit as st
from logic import persistence

UNAVAILABLE = "Unavailable"


@st.cache_data
def load_defaults():
    return persistence.load_defaults()


def init_session_state():
    """Seeds both packages and the shared tax rates once per browser session."""
    defaults = load_defaults()
    if "session_key" not in st.session_state:
        st.session_state.session_key = st.query_params.get("session", persistence.DEFAULT_SESSION_KEY)
    if "current_package" not in st.session_state:
        st.session_state.current_package = defaults.current_package
    if "new_package" not in st.session_state:
        st.session_state.new_package = defaults.new_package
    if "tax_rates" not in st.session_state:
        st.session_state.tax_rates = persistence.load_tax_rates(defaults.tax_rates, st.session_state.session_key, persistence.TAX_RATES_FILE)


def fmt_money(value, signed: bool = False) -> str:
    if value is None:
        return UNAVAILABLE
    if signed:
        return f"{'+' if value >= 0 else '-'}${abs(value):,.0f}"
    return f"${value:,.0f}"
