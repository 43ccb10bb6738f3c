import streamlit as st


def render_stat_card(title, value, subtitle, icon):
    """
    Small statistic card (This Week / Average)

    Args:
        title (str): label under the value
        value (str): big number
        subtitle (str): unit line
        icon (str): emoji shown above the value
    """
    st.markdown(f"""
    <div class="spark-card">
        <div class="spark-icon">{icon}</div>
        <div class="spark-value">{value}</div>
        <h3>{title}</h3>
        <div class="spark-sub">{subtitle}</div>
    </div>
    """, unsafe_allow_html=True)


def render_insight_card(insight):
    """insight: {"icon", "title", "description"} from logic.summary.INSIGHTS"""
    st.markdown(f"""
    <div class="spark-card spark-insight">
        <h3>{insight['icon']} {insight['title']}</h3>
        <div class="spark-sub">{insight['description']}</div>
    </div>
    """, unsafe_allow_html=True)
