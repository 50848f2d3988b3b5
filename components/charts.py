"""Plotly chart builders for the assignment dashboard."""

import plotly.express as px
import plotly.graph_objects as go
import pandas as pd
from typing import Dict, List


def team_fill_bar(rosters: List[dict], title: str = "Members vs Capacity by Team") -> go.Figure:
    """Bar chart comparing capacity and assigned members per team."""
    df = pd.DataFrame([{
        "team": r["team_code"],
        "capacity": r["capacity"],
        "members": r["member_count"],
    } for r in rosters])
    fig = px.bar(
        df, x="team", y=["capacity", "members"],
        barmode="group",
        labels={"value": "People", "team": "Team", "variable": ""},
        title=title,
        color_discrete_map={"capacity": "#4A90D9", "members": "#E8734A"},
    )
    fig.update_layout(legend_title_text="", height=400)
    return fig


def slot_donut(slot_counts: Dict[str, int], title: str = "Assignments by Time Slot") -> go.Figure:
    """Donut chart of morning vs afternoon assignments."""
    labels = list(slot_counts.keys())
    values = [slot_counts[k] for k in labels]
    fig = go.Figure(data=[go.Pie(
        labels=labels,
        values=values,
        hole=0.6,
        marker_colors=["#F5C542", "#4A90D9"],
        textinfo="percent+label",
    )])
    fig.update_layout(
        title=title,
        height=350,
        showlegend=True,
        annotations=[dict(text=str(sum(values)), x=0.5, y=0.5, font_size=16, showarrow=False)],
    )
    return fig


def team_section_heatmap(rosters: List[dict], sections: List[str]) -> go.Figure:
    """Heatmap showing members per section per team."""
    teams = [r["team_code"] for r in rosters]
    matrix = [[r["sections"].get(s, 0) for s in sections] for r in rosters]

    fig = go.Figure(data=go.Heatmap(
        z=matrix,
        x=sections,
        y=teams,
        colorscale="YlOrRd",
        text=matrix,
        texttemplate="%{text}",
        hovertemplate="Team: %{y}<br>Section: %{x}<br>Members: %{z}<extra></extra>",
    ))
    fig.update_layout(
        title="Section Mix by Team",
        xaxis_title="Section",
        yaxis_title="Team",
        height=max(400, len(teams) * 30),
    )
    return fig


def grade_stack_bar(rosters: List[dict]) -> go.Figure:
    """Stacked bar of grades per team."""
    fig = go.Figure()
    grades = sorted({g for r in rosters for g in r["grades"]})
    colors = ["#4A90D9", "#7FB77E", "#F5C542", "#E8734A"]

    for i, grade in enumerate(grades):
        fig.add_trace(go.Bar(
            name=f"Grade {grade}",
            x=[r["team_code"] for r in rosters],
            y=[r["grades"].get(grade, 0) for r in rosters],
            marker_color=colors[i % len(colors)],
        ))

    fig.update_layout(
        barmode="stack",
        title="Grade Mix by Team",
        xaxis_title="Team",
        yaxis_title="Members",
        height=400,
    )
    return fig
