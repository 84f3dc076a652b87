"""
Collection trend charts
"""
import streamlit as st
import plotly.graph_objects as go
from typing import List, Dict
import pandas as pd

from config import settings


def build_collection_trend_figure(trend_data: List[Dict]) -> go.Figure:
    """Bar chart of monthly collection rate with collected/expected in the hover"""
    df = pd.DataFrame(trend_data)

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=df['label'],
        y=df['collection_rate'],
        name='Collection Rate',
        marker=dict(color=['#cbd5e1'] * (len(df) - 1) + ['#2563eb']),
        customdata=df[['collected', 'expected']].values,
        hovertemplate=(
            '%{x}<br>Collection: %{y}%'
            f'<br>Collected: %{{customdata[0]:,.0f}} {settings.LOCAL_CURRENCY}'
            f'<br>Expected: %{{customdata[1]:,.0f}} {settings.LOCAL_CURRENCY}<extra></extra>'
        ),
    ))
    fig.update_layout(
        yaxis=dict(title='Collected (%)', rangemode='tozero'),
        xaxis=dict(title=None),
        height=280,
        margin=dict(l=10, r=10, t=30, b=10),
        showlegend=False,
    )
    return fig


def render_collection_trend(trend_data: List[Dict]):
    """Render the collection trend for recent billing cycles"""
    st.subheader("📈 Revenue Collection")

    if not trend_data:
        st.info("No units or payments yet.")
        return

    st.plotly_chart(build_collection_trend_figure(trend_data), use_container_width=True)
