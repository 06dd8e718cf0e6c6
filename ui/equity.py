import streamlit as st
import plotly.graph_objects as go
from dataclasses import replace
from logic import analytics, persistence
from logic.errors import CompensationError
from logic.models import COMPANY_TYPES, EQUITY_TYPES, RefreshGrant
from ui.utils import load_defaults

# One widget set for the rates shared by both packages
TAX_RATE_KEYS = {"federal": "tax_federal", "state": "tax_state", "amt": "tax_amt"}


def render_disclaimer(company_type: str):
    if company_type != "private":
        return
    st.warning(
        "**Important Note About Private Company Equity**\n\n"
        "The total compensation shown includes equity value which may not be immediately accessible:\n"
        "- Private company equity is typically illiquid and cannot be sold until a liquidation event (IPO, acquisition, etc.)\n"
        "- The actual value of equity may vary significantly from these estimates based on company performance and market conditions\n"
        "- Equity values are projections and not guaranteed\n"
        "- Consider liquid compensation (salary + bonus) separately when comparing offers"
    )


def _render_grant_details(state_key, pkg):
    defaults = load_defaults()
    eq = pkg.equity

    c1, c2 = st.columns(2)
    company_type = c1.selectbox("Company Type", COMPANY_TYPES, index=COMPANY_TYPES.index(pkg.company_type), key=f"{state_key}_company")
    if company_type != pkg.company_type:
        pkg = pkg.with_company_type(company_type, defaults.liquidity_discount, defaults.exit_multiple)
        eq = pkg.equity

    equity_type = c2.selectbox("Equity Type", EQUITY_TYPES, index=EQUITY_TYPES.index(eq.type), key=f"{state_key}_eq_type")
    grant = c1.number_input("Initial Grant Value ($)", min_value=0.0, value=float(eq.initial_grant), step=10000.0, key=f"{state_key}_grant")
    appreciation = c2.number_input("Annual Appreciation (%)", value=float(eq.annual_appreciation), step=1.0, key=f"{state_key}_appr")
    changes = dict(type=equity_type, initial_grant=grant, annual_appreciation=appreciation)

    if equity_type in ("ISO", "NSO"):
        o1, o2, o3 = st.columns(3)
        changes["strike_price"] = o1.number_input("Strike Price ($)", min_value=0.0, value=float(eq.strike_price or 0.0), step=0.5, key=f"{state_key}_strike")
        changes["shares"] = o2.number_input("Number of Shares", min_value=0.0, value=float(eq.shares or 0.0), step=100.0, key=f"{state_key}_shares")
        changes["current_fmv"] = o3.number_input("Current FMV ($)", min_value=0.0, value=float(eq.current_fmv or 0.0), step=0.5, key=f"{state_key}_fmv")

    if company_type == "private":
        p1, p2 = st.columns(2)
        discount = eq.liquidity_discount if eq.liquidity_discount is not None else defaults.liquidity_discount
        multiple = eq.exit_multiple if eq.exit_multiple is not None else defaults.exit_multiple
        changes["liquidity_discount"] = p1.number_input("Liquidity Discount (%)", 0.0, 100.0, float(discount), step=5.0, key=f"{state_key}_disc")
        changes["exit_multiple"] = p2.number_input("Exit Multiple", min_value=0.0, value=float(multiple), step=0.5, key=f"{state_key}_exit")

    return pkg.with_equity(**changes)


def _render_vesting(state_key, pkg):
    eq = pkg.equity
    st.markdown("**Vesting Schedule** (percent vesting in each year)")
    cols = st.columns(len(eq.vesting_schedule) or 1)
    schedule = []
    for i, pct in enumerate(eq.vesting_schedule):
        schedule.append(cols[i].number_input(f"Year {i + 1}", 0.0, 100.0, float(pct), step=5.0, key=f"{state_key}_vest_{i}"))
    if sum(schedule) > 100:
        st.caption(f"Schedule adds up to {sum(schedule):.0f}% of the initial grant")

    st.markdown("**Refresh Grants**")
    grants = list(eq.refresh_grants)
    remove = []
    for i, g in enumerate(grants):
        r1, r2, r3 = st.columns([1, 2, 0.5])
        year = r1.number_input("Year", min_value=2, value=int(g.year), step=1, key=f"{state_key}_rg_year_{i}")
        amount = r2.number_input("Amount ($)", min_value=0.0, value=float(g.amount), step=5000.0, key=f"{state_key}_rg_amt_{i}")
        grants[i] = RefreshGrant(year=int(year), amount=amount)
        if r3.button("🗑️", key=f"{state_key}_rg_del_{i}"):
            remove.append(i)
    added = st.button("Add Refresh Grant", key=f"{state_key}_rg_add")

    if remove or added:
        grants = [g for i, g in enumerate(grants) if i not in remove]
        if added:
            next_year = max([g.year for g in grants], default=1) + 1
            grants.append(RefreshGrant(year=next_year, amount=0.0))
        # Row widgets are keyed by position, drop them so rows re-seed from the new list
        for key in [k for k in st.session_state.keys() if k.startswith(f"{state_key}_rg_")]:
            del st.session_state[key]
        st.session_state[state_key] = pkg.with_equity(vesting_schedule=tuple(schedule), refresh_grants=tuple(grants))
        st.rerun()

    return pkg.with_equity(vesting_schedule=tuple(schedule), refresh_grants=tuple(grants))


def update_tax_rates_cb():
    """Persist the shared tax rates, only when one of their widgets was edited."""
    updated = replace(st.session_state.tax_rates, **{field: st.session_state[key] for field, key in TAX_RATE_KEYS.items()})
    st.session_state.tax_rates = updated
    try:
        persistence.save_tax_rates(updated, st.session_state.session_key, persistence.TAX_RATES_FILE)
        st.session_state.pop("tax_rates_save_error", None)
    except OSError as e:
        st.session_state.tax_rates_save_error = str(e)


def render_tax_rates():
    """Single editor for the tax rates shared by both packages."""
    rates = st.session_state.tax_rates
    st.subheader("Tax Rates")
    st.caption("Shared by both packages.")
    st.number_input("Federal Tax Rate (%)", 0.0, 100.0, float(rates.federal), step=1.0,
                    key=TAX_RATE_KEYS["federal"], on_change=update_tax_rates_cb)
    st.number_input("State Tax Rate (%)", 0.0, 100.0, float(rates.state), step=0.5,
                    key=TAX_RATE_KEYS["state"], on_change=update_tax_rates_cb)
    st.number_input("AMT Rate (%)", 0.0, 100.0, float(rates.amt), step=1.0,
                    key=TAX_RATE_KEYS["amt"], on_change=update_tax_rates_cb)
    if "tax_rates_save_error" in st.session_state:
        st.warning(f"Tax rates could not be saved: {st.session_state.tax_rates_save_error}")


def render_equity(state_key: str):
    pkg = st.session_state[state_key]

    st.subheader("Equity Details")
    st.caption("Configure equity grant and vesting details")

    tab_grant, tab_vesting, tab_tax = st.tabs(["Grant Details", "Vesting", "Tax"])
    with tab_grant:
        pkg = _render_grant_details(state_key, pkg)
    with tab_vesting:
        pkg = _render_vesting(state_key, pkg)
    with tab_tax:
        rates = st.session_state.tax_rates
        st.caption(
            f"Estimated with Federal {rates.federal:g}%, State {rates.state:g}% and AMT {rates.amt:g}%. "
            "Edit the shared rates in the sidebar."
        )

    st.session_state[state_key] = pkg
    render_disclaimer(pkg.company_type)

    try:
        df = analytics.equity_frame(pkg, st.session_state.tax_rates)
    except CompensationError as e:
        st.error(f"Equity value unavailable: {e}")
        return

    if df["Negative Tax"].any():
        st.info("The NSO spread is negative in some years, so the estimated tax shows as a credit.")

    fig = go.Figure()
    fig.add_trace(go.Scatter(x=df["Year"], y=df["Gross"], mode='lines+markers', name="Gross Value"))
    fig.add_trace(go.Scatter(x=df["Year"], y=df["Tax"], mode='lines+markers', name="Tax"))
    fig.add_trace(go.Scatter(x=df["Year"], y=df["Net"], mode='lines+markers', name="Net Value"))
    fig.update_layout(title="Equity Value", yaxis_tickprefix="$", height=300)
    st.plotly_chart(fig, width='stretch')
