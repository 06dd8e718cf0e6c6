import streamlit as st
import pandas as pd
import plotly.graph_objects as go
from logic import projection
from logic.models import PROJECTION_YEARS
from ui.utils import fmt_money


def _breakdown_row(year, label, b):
    return {
        "Year": f"Year {year + 1}",
        "Package": label,
        "Base": fmt_money(b.salary if b else None),
        "Bonus": fmt_money(b.bonus if b else None),
        "Equity": fmt_money(b.equity.risk_adjusted if b else None),
        "Total": fmt_money(b.total if b else None),
    }


def render_comparison():
    st.header("Package Comparison")
    st.caption("Compare total compensation over time")

    current = st.session_state.current_package
    new = st.session_state.new_package
    rates = st.session_state.tax_rates

    current_years = projection.project_years_safe(current, PROJECTION_YEARS, rates)
    new_years = projection.project_years_safe(new, PROJECTION_YEARS, rates)

    # Only a full horizon on both sides gives meaningful aggregate metrics
    if all(current_years) and all(new_years):
        result = projection.compare(current, new, PROJECTION_YEARS, rates)
        m1, m2, m3 = st.columns(3)
        m1.metric("Year 1 Difference", fmt_money(result[0].difference, signed=True))
        m2.metric(f"{PROJECTION_YEARS}-Year Total Difference", fmt_money(projection.total_difference(result), signed=True))
        m3.metric("Risk Adjusted Difference", fmt_money(projection.risk_adjusted_difference(result, new), signed=True),
                  help="Final year difference, reduced by 30% when the new package is at a private company")
    else:
        st.error("Some years cannot be projected: extend the growth and vesting schedules to cover every year.")

    fig = go.Figure()
    labels = [f"Year {y + 1}" for y in range(PROJECTION_YEARS)]
    fig.add_trace(go.Scatter(x=labels, y=[b.total if b else None for b in current_years], mode='lines+markers', name="Current Package"))
    fig.add_trace(go.Scatter(x=labels, y=[b.total if b else None for b in new_years], mode='lines+markers', name="New Package"))
    fig.update_layout(yaxis_tickprefix="$", height=400)
    st.plotly_chart(fig, width='stretch')

    st.subheader("Year by Year Breakdown")
    rows = []
    for y in range(PROJECTION_YEARS):
        cur, nxt = current_years[y], new_years[y]
        rows.append(_breakdown_row(y, "Current", cur))
        rows.append(_breakdown_row(y, "New", nxt))
        rows.append({
            "Year": f"Year {y + 1}",
            "Package": "Difference",
            "Base": fmt_money(nxt.salary - cur.salary if cur and nxt else None, signed=True),
            "Bonus": fmt_money(nxt.bonus - cur.bonus if cur and nxt else None, signed=True),
            "Equity": fmt_money(nxt.equity.risk_adjusted - cur.equity.risk_adjusted if cur and nxt else None, signed=True),
            "Total": fmt_money(nxt.total - cur.total if cur and nxt else None, signed=True),
        })
    st.dataframe(pd.DataFrame(rows).set_index(["Year", "Package"]), width='stretch')
