import streamlit as st

from balance.compare_engine import ComparisonClient
from balance.config import configure_logging
from balance.view_state import ComparisonView

# ------------- CONFIG -------------
st.set_page_config(
    page_title="Pros & Cons Scale",
    page_icon="⚖️",
    layout="wide",
)

configure_logging()


@st.cache_resource
def get_comparison_client():
    # One client per process; the Gemini handle inside it is built on first use.
    return ComparisonClient()


view = ComparisonView(st.session_state, get_comparison_client())
view.init_state()


# ------------- RESULT CARDS -------------
def result_card(analysis):
    """
    Render one option: its name, the pros and the cons.
    """
    with st.container(border=True):
        st.subheader(analysis.name)

        st.markdown("**✅ Pros**")
        for pro in analysis.pros:
            st.markdown(f"✅ {pro}")

        st.markdown("**❌ Cons**")
        for con in analysis.cons:
            st.markdown(f"❌ {con}")


def conclusion_card(conclusion: str):
    with st.container(border=True):
        st.subheader("🤖 AI Conclusion")
        st.write(conclusion)


# ------------- MAIN UI -------------
st.title("⚖️ Pros & Cons Scale")
st.caption("Compare two options and let the AI weigh the pros and cons for you.")

col_a, col_b = st.columns(2)
with col_a:
    st.text_area(
        "Option A",
        key="option_a",
        placeholder="Option A: e.g. Working as a freelancer",
        height=130,
        disabled=view.is_loading,
    )
with col_b:
    st.text_area(
        "Option B",
        key="option_b",
        placeholder="Option B: e.g. Working at a company",
        height=130,
        disabled=view.is_loading,
    )

st.button(
    "⏳" if view.is_loading else "Analyze",
    on_click=view.begin,
    disabled=view.submit_disabled,
    type="primary",
    width="stretch",
)

if view.error:
    st.error(view.error)

if view.is_loading:
    with st.spinner("Analyzing... The AI is weighing the options."):
        view.resolve()
    # Redraw with the inputs enabled again and the outcome shown.
    st.rerun()

if view.result is not None:
    left, right = st.columns(2)
    with left:
        result_card(view.result.item_a)
    with right:
        result_card(view.result.item_b)
    conclusion_card(view.result.conclusion)

if view.is_idle:
    st.info('Enter two options to compare and click "Analyze".')
