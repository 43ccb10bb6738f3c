import plotly.graph_objects as go
import streamlit as st


def build_trend_figure(trend, y_title, y_range=None):
    """
    Line + filled area over the daily means.

    Args:
        trend (list[TrendPoint]): ascending daily points
        y_title (str): y-axis title
        y_range (tuple | None): fixed y-axis range, e.g. (1, 5) for energy
    """
    days = [p.day for p in trend]
    values = [p.value for p in trend]

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=days,
        y=values,
        mode='lines+markers',
        name=y_title,
        line=dict(color='#3b82f6', width=3, shape='spline'),
        marker=dict(size=7, color='#3b82f6', line=dict(width=1, color='white')),
        fill='tozeroy',
        fillcolor='rgba(59,130,246,0.1)',
        hovertemplate='%{x|%a %b %d}<br><b>%{y:.1f}</b><extra></extra>',
    ))

    yaxis = dict(
        title=y_title,
        gridcolor='rgba(128,128,128,0.2)',
        showgrid=True,
    )
    if y_range:
        yaxis['range'] = list(y_range)
        yaxis['dtick'] = 1

    fig.update_layout(
        height=260,
        margin=dict(l=50, r=20, t=20, b=40),
        showlegend=False,
        xaxis=dict(
            title='',
            tickformat='%a',
            dtick=86400000,
            gridcolor='rgba(128,128,128,0.2)',
        ),
        yaxis=yaxis,
        hovermode='x unified',
    )
    return fig


def render_trend_chart(trend, y_title, y_range=None):
    st.plotly_chart(build_trend_figure(trend, y_title, y_range), use_container_width=True)
