import streamlit as st
import plotly.graph_objects as go
from logic import analytics
from logic.errors import CompensationError
from ui.utils import fmt_money


def render_compensation(state_key: str, title: str):
    pkg = st.session_state[state_key]

    st.subheader(title)
    st.caption("Configure base salary and bonus targets")

    base = st.number_input("Base Salary ($)", min_value=1.0, value=float(pkg.base), step=1000.0, key=f"{state_key}_base")
    if base != pkg.base:
        pkg = pkg.with_base(base)

    st.markdown("**Year by Year Growth**")
    for i, step in enumerate(pkg.growth):
        with st.container(border=True):
            st.markdown(f"Year {i + 1}")
            c1, c2 = st.columns(2)
            growth = c1.number_input("Salary Growth (%)", value=float(step.salary_growth), step=0.5, key=f"{state_key}_growth_{i}")
            bonus = c2.number_input("Target Bonus (%)", min_value=0.0, value=float(step.bonus_percentage), step=1.0, key=f"{state_key}_bonus_{i}")
            if growth != step.salary_growth or bonus != step.bonus_percentage:
                pkg = pkg.with_growth_step(i, salary_growth=growth, bonus_percentage=bonus)

    # Each edit yields a fresh package; store it before projecting
    st.session_state[state_key] = pkg

    try:
        df = analytics.cash_frame(pkg)
    except CompensationError as e:
        st.error(f"Cannot project cash compensation: {e}")
        return

    for row in df.itertuples(index=False):
        st.caption(f"{row.Year}: Base {fmt_money(row[1])} | Bonus {fmt_money(row[2])} | Total {fmt_money(row[3])}")

    fig = go.Figure()
    for col in ["Base Salary", "Target Bonus", "Total Cash"]:
        fig.add_trace(go.Scatter(x=df["Year"], y=df[col], mode='lines+markers', name=col))
    fig.update_layout(title="Compensation Growth", yaxis_tickprefix="$", height=300)
    st.plotly_chart(fig, width='stretch')
